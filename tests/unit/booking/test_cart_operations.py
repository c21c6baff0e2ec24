"""
Unit Tests for LineItem model and cart operations
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking.line_items.cart import (
    LineItemNotFoundError,
    add_line,
    cart_fingerprint,
    flag_unavailable,
    remove_flagged,
    remove_line,
    replace_line,
    update_quantity,
)
from booking.line_items.models import LineItem, LineItemKind, VariationKey
from tests.fixtures import make_line, make_package_line, make_unavailable


class TestLineItemModel:

    def test_line_id_assigned_by_kind(self):
        assert make_line().line_id.startswith("item_")
        assert make_package_line().line_id.startswith("pkg_")

    def test_explicit_line_id_kept(self):
        assert make_line(line_id="line_a").line_id == "line_a"

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_line(quantity=0)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            make_line(unit_price="-1")

    def test_variation_label(self):
        assert make_line().variation_label == "Ivory, M"
        assert make_package_line().variation_label == "Rose Gold"
        assert VariationKey().label == ""

    def test_line_total(self):
        assert make_line(quantity=3, unit_price="250.50").line_total == Decimal("751.50")


class TestAddLine:

    def test_same_selection_merges_quantity(self):
        items = add_line([], make_line(quantity=1))
        items = add_line(items, make_line(quantity=2))
        assert len(items) == 1
        assert items[0].quantity == 3

    def test_different_size_is_separate_line(self):
        items = add_line([make_line(size="M")], make_line(size="L"))
        assert [i.variation.size for i in items] == ["M", "L"]

    def test_merge_clears_unavailable_flag(self):
        flagged = make_line(flagged_unavailable=True)
        items = add_line([flagged], make_line())
        assert items[0].flagged_unavailable is False

    def test_input_list_untouched(self):
        original = [make_line()]
        add_line(original, make_line(resource_id="gown_002"))
        assert len(original) == 1


class TestEditLines:

    def test_update_quantity(self):
        line = make_line(line_id="a")
        items = update_quantity([line], "a", 4)
        assert items[0].quantity == 4

    def test_update_quantity_below_one_rejected(self):
        with pytest.raises(ValueError):
            update_quantity([make_line(line_id="a")], "a", 0)

    def test_unknown_line_raises(self):
        with pytest.raises(LineItemNotFoundError):
            remove_line([make_line(line_id="a")], "b")

    def test_replace_keeps_id_and_position(self):
        items = [make_line(line_id="a"), make_line(line_id="b", resource_id="gown_002")]
        items = replace_line(items, "a", make_line(size="S"))
        assert items[0].line_id == "a"
        assert items[0].variation.size == "S"

    def test_remove_flagged(self):
        items = [make_line(line_id="a", flagged_unavailable=True), make_line(line_id="b", resource_id="x")]
        assert [i.line_id for i in remove_flagged(items)] == ["b"]


class TestFingerprint:

    def test_order_independent(self):
        a, b = make_line(), make_package_line()
        assert cart_fingerprint([a, b]) == cart_fingerprint([b, a])

    def test_ignores_line_ids_and_flags(self):
        assert cart_fingerprint([make_line(line_id="x")]) == cart_fingerprint(
            [make_line(line_id="y", flagged_unavailable=True)]
        )

    def test_quantity_changes_fingerprint(self):
        assert cart_fingerprint([make_line(quantity=1)]) != cart_fingerprint([make_line(quantity=2)])


class TestFlagUnavailable:

    def test_flags_by_resource_and_variation(self):
        items = [make_line(line_id="a", size="M"), make_line(line_id="b", size="L")]
        flagged = flag_unavailable(items, [make_unavailable(variation_label="Ivory, M")])
        assert [i.flagged_unavailable for i in flagged] == [True, False]

    def test_flags_by_name_when_resource_missing(self):
        items = [make_line(line_id="a")]
        flagged = flag_unavailable(items, [make_unavailable(resource_id=None, name="ivory ball gown")])
        assert flagged[0].flagged_unavailable is True

    def test_clears_stale_flags(self):
        items = [make_line(line_id="a", flagged_unavailable=True)]
        assert flag_unavailable(items, [])[0].flagged_unavailable is False

    def test_package_lines_matched_by_motif(self):
        items = [make_package_line()]
        report = make_unavailable(resource_id="pkg_001", name="Debut Package", variation_label="Rose Gold")
        assert flag_unavailable(items, [report])[0].flagged_unavailable is True

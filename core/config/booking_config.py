#!/usr/bin/env python3
"""Booking pipeline main configuration

Combines all sub-configs with the business rules used by the verification,
financial and wizard layers.
"""
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional, FrozenSet

from .logging_config import LoggingConfig
from .service_config import ServiceConfig


def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default

def _decimal(val: str, default: Optional[Decimal]) -> Optional[Decimal]:
    if not val:
        return default
    if val.lower() == "none":
        return None
    try:
        return Decimal(val)
    except InvalidOperation:
        return default

def _weekdays(val: str, default: FrozenSet[int]) -> FrozenSet[int]:
    if val is None:
        return default
    try:
        return frozenset(int(part) for part in val.split(",") if part.strip())
    except ValueError:
        return default


# ===========================================
# Rule Sections
# ===========================================

@dataclass
class VerificationConfig:
    """Debounced availability verification"""
    debounce_seconds: float = 0.5

    @classmethod
    def from_env(cls) -> 'VerificationConfig':
        return cls(
            debounce_seconds=_float(os.getenv("VERIFY_DEBOUNCE_SECONDS", ""), 0.5),
        )


@dataclass
class FinancialConfig:
    """Deposit and payment rules"""
    currency: str = "PHP"
    item_deposit_rate: Decimal = Decimal("1")
    item_deposit_cap: Optional[Decimal] = Decimal("500")
    package_deposit: Decimal = Decimal("2000")
    custom_rent_back_full_price: bool = True
    down_payment_ratio: Decimal = Decimal("0.5")

    @classmethod
    def from_env(cls) -> 'FinancialConfig':
        return cls(
            currency=os.getenv("CURRENCY", "PHP"),
            item_deposit_rate=_decimal(os.getenv("ITEM_DEPOSIT_RATE", ""), Decimal("1")),
            item_deposit_cap=_decimal(os.getenv("ITEM_DEPOSIT_CAP", ""), Decimal("500")),
            package_deposit=_decimal(os.getenv("PACKAGE_DEPOSIT", ""), Decimal("2000")),
            custom_rent_back_full_price=_bool(os.getenv("CUSTOM_RENT_BACK_FULL_PRICE", "true")),
            down_payment_ratio=_decimal(os.getenv("DOWN_PAYMENT_RATIO", ""), Decimal("0.5")),
        )


@dataclass
class CalendarConfig:
    """Closure days, rental spans and contact rules"""
    # date.weekday() numbering: Monday=0 ... Sunday=6
    closed_weekdays: FrozenSet[int] = frozenset({6})
    rental_window_days: int = 4
    phone_pattern: str = r"^09\d{9}$"

    @classmethod
    def from_env(cls) -> 'CalendarConfig':
        return cls(
            closed_weekdays=_weekdays(os.getenv("CLOSED_WEEKDAYS"), frozenset({6})),
            rental_window_days=_int(os.getenv("RENTAL_WINDOW_DAYS", ""), 4),
            phone_pattern=os.getenv("PHONE_PATTERN", r"^09\d{9}$"),
        )


@dataclass
class NotificationConfig:
    """Notification sink behaviour"""
    dismiss_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> 'NotificationConfig':
        return cls(
            dismiss_seconds=_float(os.getenv("NOTIFICATION_DISMISS_SECONDS", ""), 5.0),
        )


# ===========================================
# Main Configuration
# ===========================================

@dataclass
class AppConfig:
    """Main configuration for the booking pipeline"""
    environment: str = "development"
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    services: ServiceConfig = field(default_factory=ServiceConfig)
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    financial: FinancialConfig = field(default_factory=FinancialConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load the complete configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=_bool(os.getenv("DEBUG", "false")),
            logging=LoggingConfig.from_env(),
            services=ServiceConfig.from_env(),
            verification=VerificationConfig.from_env(),
            financial=FinancialConfig.from_env(),
            calendar=CalendarConfig.from_env(),
            notifications=NotificationConfig.from_env(),
        )

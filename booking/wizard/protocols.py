"""
Wizard Protocols (Interfaces)
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfirmationPrompt(Protocol):
    """Asks the user a yes/no question (e.g. a confirm dialog)"""

    async def confirm(self, message: str) -> bool:
        ...

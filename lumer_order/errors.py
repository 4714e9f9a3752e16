"""Exceptions raised by the cart and checkout workflows."""

from __future__ import annotations


class OrderAssistantError(Exception):
    """Base class for recoverable ordering errors."""


class WorkflowStateError(OrderAssistantError):
    """An operation was called from a state that does not allow it."""


class EmptyCartError(OrderAssistantError):
    """Checkout was requested with nothing in the cart."""


class CheckoutValidationError(OrderAssistantError):
    """A required checkout field is missing."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class SnapshotDecodeError(OrderAssistantError, ValueError):
    """A persisted cart snapshot could not be decoded."""


class HandoffError(OrderAssistantError):
    """The order link could not be handed to a browser."""


class ClipboardError(OrderAssistantError):
    """No clipboard mechanism accepted the text."""


class FocusError(OrderAssistantError):
    """A modal focus scope was acquired while another one is held."""

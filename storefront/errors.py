"""
Exceptions raised by the storefront services.

Every exception carries the HTTP status and machine-readable code it maps to;
the handler in ``storefront.main`` renders them as ``{"error", "detail"}``.
"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront errors."""

    status_code = 500
    error_code = "server_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(StorefrontError):
    """Rejected input; nothing was mutated."""

    status_code = 400
    error_code = "validation_error"


class InvalidPhoneError(ValidationError):
    """Raised when a phone number cannot be normalized to E.164."""

    error_code = "invalid_phone"

    def __init__(self, phone: Optional[str] = None, message: Optional[str] = None):
        self.phone = phone
        if message is None:
            message = "Enter a valid phone number, e.g. 0701234567 or +46701234567."
        super().__init__(message)


class ItemUnavailableError(StorefrontError):
    """Raised when an out-of-stock item is added or checked out."""

    status_code = 409
    error_code = "item_unavailable"

    def __init__(self, item_ids, message: Optional[str] = None):
        self.item_ids = list(item_ids)
        if message is None:
            message = "One or more items in your cart are not available right now. Remove them and try again."
        super().__init__(message)


class OrderingClosedError(StorefrontError):
    """Raised when an order is placed outside the ordering window."""

    status_code = 409
    error_code = "ordering_closed"


class WebhookSignatureError(StorefrontError):
    """Webhook body could not be authenticated."""

    status_code = 400
    error_code = "invalid_signature"


class WebhookPayloadError(StorefrontError):
    """Webhook body could not be parsed."""

    status_code = 400
    error_code = "invalid_payload"


class WebhookProcessingError(StorefrontError):
    """Authenticated event could not be applied; the sender should retry."""

    status_code = 500
    error_code = "webhook_processing_failed"


class NotFoundError(StorefrontError):
    status_code = 404
    error_code = "not_found"


class DownstreamError(StorefrontError):
    """An external collaborator failed; the caller may retry."""

    status_code = 502
    error_code = "downstream_error"


class PaymentProcessorError(DownstreamError):
    error_code = "payment_error"


class NotificationError(DownstreamError):
    error_code = "notification_error"


class StoreUnavailableError(DownstreamError):
    status_code = 503
    error_code = "store_unavailable"

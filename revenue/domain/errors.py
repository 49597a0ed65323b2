"""Domain error codes for the revenue module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    GATEWAY_UNREACHABLE = "GATEWAY_UNREACHABLE"
    GATEWAY_ERROR = "GATEWAY_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    UNKNOWN_ACCESS_TYPE = "UNKNOWN_ACCESS_TYPE"
    AMOUNT_TOO_LOW = "AMOUNT_TOO_LOW"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    PROMO_CODE_NOT_FOUND = "PROMO_CODE_NOT_FOUND"
    PROMO_CODE_EXPIRED = "PROMO_CODE_EXPIRED"
    PROMO_CODE_NOT_APPLICABLE = "PROMO_CODE_NOT_APPLICABLE"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class GatewayUnreachableError(DomainError):
    """Raised when the first page of the payment feed cannot be retrieved."""

    def __init__(self, message: str = "Payment gateway is unreachable") -> None:
        super().__init__(code=ErrorCode.GATEWAY_UNREACHABLE, message=message)


class GatewayError(DomainError):
    """Raised when the gateway rejects or fails a request."""

    def __init__(self, message: str = "Payment failed") -> None:
        super().__init__(code=ErrorCode.GATEWAY_ERROR, message=message)


class StoreUnavailableError(DomainError):
    """Raised when the document store cannot be read or written."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Database offline",
        )


class UnknownAccessTypeError(DomainError):
    """Raised when an access type has neither a static nor a dynamic price."""

    def __init__(self, access_type: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_ACCESS_TYPE,
            message=f"Invalid payment type specified: {access_type}",
        )


class AmountTooLowError(DomainError):
    """Raised when an open amount is below the configured minimum."""

    def __init__(self, minimum: int) -> None:
        super().__init__(
            code=ErrorCode.AMOUNT_TOO_LOW,
            message=f"Amount must be at least {minimum} minor units",
        )


class ItemNotFoundError(DomainError):
    """Raised when a priced catalog item does not exist or has no price."""

    def __init__(self, item_id: str | None) -> None:
        super().__init__(
            code=ErrorCode.ITEM_NOT_FOUND,
            message=f"Item not found: {item_id}",
        )


class PromoCodeNotFoundError(DomainError):
    """Raised when a promo code does not exist."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROMO_CODE_NOT_FOUND,
            message="Invalid voucher code",
        )


class PromoCodeExpiredError(DomainError):
    """Raised when a promo code is past its expiry date."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROMO_CODE_EXPIRED,
            message="This code has expired",
        )


class PromoCodeNotApplicableError(DomainError):
    """Raised when a promo code is restricted to a different item."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROMO_CODE_NOT_APPLICABLE,
            message="This code is not valid for this specific content",
        )


class QuotaExceededError(DomainError):
    """Raised when a promo code has reached its maximum usage."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.QUOTA_EXCEEDED,
            message="This code has reached its maximum usage limit",
        )

"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self


@dataclass(frozen=True)
class Money:
    """Amount in integer minor units (cents)."""

    amount: int

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("Money amount must be an integer number of minor units")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount // 100}.{self.amount % 100:02d}"


@dataclass(frozen=True)
class PartnerShare:
    """Fraction of gross revenue owed to the content owner."""

    ratio: Decimal

    def __post_init__(self) -> None:
        if not Decimal(0) <= self.ratio <= Decimal(1):
            raise ValueError("Partner share must be between 0 and 1")

    @classmethod
    def from_value(cls, value: str | float | Decimal) -> Self:
        return cls(ratio=Decimal(str(value)))


@dataclass(frozen=True)
class PromoCodeKey:
    """Case-insensitive promo code identifier, stored upper-case."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or self.value != self.value.strip().upper():
            raise ValueError("Promo code key must be a non-empty normalized string")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().upper())

    def __str__(self) -> str:
        return self.value

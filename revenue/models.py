"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Catalog and payout rows are written by other parts of the platform; this app
only reads them and increments promo code usage.
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from revenue.domain import PromoCodeKey


class Movie(models.Model):
    """Persistence model for catalog films."""

    key = models.CharField(primary_key=True, max_length=255)
    title = models.CharField(max_length=255)
    director = models.CharField(max_length=500, blank=True, default="")
    sale_price = models.PositiveIntegerField(blank=True, null=True)
    watch_party_price = models.PositiveIntegerField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class FestivalBlock(models.Model):
    """Persistence model for festival blocks."""

    key = models.CharField(primary_key=True, max_length=255)
    title = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class ViewCount(models.Model):
    """Per-movie view counter maintained by the playback tracker."""

    movie_key = models.CharField(primary_key=True, max_length=255)
    count = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return f"{self.movie_key}: {self.count}"


class PromoCode(models.Model):
    """Persistence model for promo codes."""

    class Type(models.TextChoices):
        ONE_TIME_ACCESS = "one_time_access", "One-time access"
        DISCOUNT = "discount", "Discount"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=64, unique=True)
    type = models.CharField(max_length=32, choices=Type.choices)
    discount_value = models.PositiveSmallIntegerField(blank=True, null=True)
    max_uses = models.PositiveIntegerField(default=1)
    used_count = models.PositiveIntegerField(default=0)
    expires_at = models.DateTimeField(blank=True, null=True)
    item_id = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(used_count__lte=models.F("max_uses")),
                name="promo_used_count_within_max_uses",
            ),
            models.CheckConstraint(
                condition=~models.Q(code=""),
                name="promo_code_not_blank",
            ),
            models.CheckConstraint(
                condition=models.Q(type="one_time_access")
                | models.Q(discount_value__isnull=False, discount_value__lte=100),
                name="promo_discount_value_in_range",
            ),
        ]

    def __str__(self) -> str:
        return self.code

    def clean(self) -> None:
        errors = {}
        try:
            self.code = PromoCodeKey.from_string(self.code or "").value
        except ValueError:
            errors["code"] = "Promo code cannot be blank."
        if self.type == self.Type.DISCOUNT and (
            self.discount_value is None or self.discount_value > 100
        ):
            errors["discount_value"] = "Discount codes need a percentage between 0 and 100."
        if errors:
            raise ValidationError(errors)


class PayoutRecord(models.Model):
    """Append-only payout history."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient = models.CharField(max_length=255)
    amount = models.PositiveIntegerField()
    status = models.CharField(max_length=16, choices=Status.choices)
    processed_at = models.DateTimeField()
    gateway_payout_id = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["-processed_at"]
        indexes = [
            models.Index(fields=["recipient", "status"], name="revenue_pay_recipie_3f1c2a_idx"),
            models.Index(fields=["-processed_at"], name="revenue_pay_process_8d0e4b_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.recipient} - {self.amount}"

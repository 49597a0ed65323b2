"""Django signals for promo code normalization."""

from django.db.models.signals import pre_save
from django.dispatch import receiver

from revenue.models import PromoCode


@receiver(pre_save, sender=PromoCode)
def normalize_promo_code(sender, instance, **kwargs):
    """Store codes upper-case so lookups are case-insensitive.

    Blank codes are rejected by ``PromoCode.clean`` and the table constraint.
    """
    instance.code = (instance.code or "").strip().upper()

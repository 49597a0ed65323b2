from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("revenue", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="promocode",
            constraint=models.CheckConstraint(
                condition=~models.Q(code=""),
                name="promo_code_not_blank",
            ),
        ),
        migrations.AddConstraint(
            model_name="promocode",
            constraint=models.CheckConstraint(
                condition=models.Q(type="one_time_access")
                | models.Q(discount_value__isnull=False, discount_value__lte=100),
                name="promo_discount_value_in_range",
            ),
        ),
    ]

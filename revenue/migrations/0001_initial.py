import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FestivalBlock",
            fields=[
                ("key", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="Movie",
            fields=[
                ("key", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("director", models.CharField(blank=True, default="", max_length=500)),
                ("sale_price", models.PositiveIntegerField(blank=True, null=True)),
                ("watch_party_price", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="PayoutRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("recipient", models.CharField(max_length=255)),
                ("amount", models.PositiveIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                        ],
                        max_length=16,
                    ),
                ),
                ("processed_at", models.DateTimeField()),
                ("gateway_payout_id", models.CharField(blank=True, default="", max_length=255)),
            ],
            options={
                "ordering": ["-processed_at"],
                "indexes": [
                    models.Index(fields=["recipient", "status"], name="revenue_pay_recipie_3f1c2a_idx"),
                    models.Index(fields=["-processed_at"], name="revenue_pay_process_8d0e4b_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PromoCode",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=64, unique=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("one_time_access", "One-time access"),
                            ("discount", "Discount"),
                        ],
                        max_length=32,
                    ),
                ),
                ("discount_value", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("max_uses", models.PositiveIntegerField(default=1)),
                ("used_count", models.PositiveIntegerField(default=0)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("item_id", models.CharField(blank=True, max_length=255, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("used_count__lte", models.F("max_uses"))),
                        name="promo_used_count_within_max_uses",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ViewCount",
            fields=[
                ("movie_key", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("count", models.PositiveIntegerField(default=0)),
            ],
        ),
    ]

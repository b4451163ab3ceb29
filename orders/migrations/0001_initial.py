from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("order_id", models.CharField(max_length=64, unique=True)),
                (
                    "tier",
                    models.CharField(
                        choices=[("trader", "Trader"), ("pro", "Pro"), ("enterprise", "Enterprise")],
                        max_length=32,
                    ),
                ),
                ("include_addons", models.BooleanField(default=False)),
                ("customer_email", models.EmailField(db_index=True, max_length=254)),
                ("customer_name", models.CharField(blank=True, max_length=255, null=True)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default="EUR", max_length=3)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("license_key", models.CharField(blank=True, max_length=19, null=True)),
                (
                    "payment_transaction_id",
                    models.CharField(blank=True, max_length=128, null=True),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["status", "created_at"], name="orders_status_created_idx"
                    )
                ],
            },
        ),
    ]

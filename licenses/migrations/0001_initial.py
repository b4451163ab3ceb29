from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("license_key", models.CharField(max_length=19, unique=True)),
                (
                    "tier",
                    models.CharField(
                        choices=[("trader", "Trader"), ("pro", "Pro"), ("enterprise", "Enterprise")],
                        max_length=32,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                (
                    "hardware_id",
                    models.CharField(blank=True, db_index=True, max_length=255, null=True),
                ),
                (
                    "owner_email",
                    models.EmailField(blank=True, db_index=True, max_length=254, null=True),
                ),
                ("owner_name", models.CharField(blank=True, max_length=255, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_validated_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["is_active", "expires_at"], name="licenses_active_expiry_idx"
                    )
                ],
            },
        ),
    ]

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activation",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("domain", models.CharField(max_length=255)),
                ("theme_id", models.CharField(blank=True, max_length=255, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("activated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "license",
                    models.ForeignKey(
                        db_column="license_key",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activations",
                        to="licenses.license",
                    ),
                ),
            ],
            options={
                "db_table": "license_activations",
                "ordering": ["-activated_at"],
                "indexes": [
                    models.Index(
                        fields=["license", "is_active"], name="activation_license_active_idx"
                    ),
                    models.Index(
                        fields=["is_active", "activated_at"], name="activation_active_at_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("license", "domain"), name="activation_license_domain_uniq"
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("license",),
                        name="activation_one_active_per_license",
                    ),
                ],
            },
        ),
    ]

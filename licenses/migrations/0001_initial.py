import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "license_key",
                    models.CharField(max_length=100, primary_key=True, serialize=False),
                ),
                ("domain", models.CharField(blank=True, max_length=255, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=False)),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now, editable=False
                    ),
                ),
                ("activated_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["domain"], name="licenses_domain_idx")],
            },
        ),
    ]

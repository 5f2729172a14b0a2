import django.db.models.deletion
from django.db import migrations, models


STATUS_CHOICES = [("active", "Active"), ("inactive", "Inactive")]


def _base_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="active", max_length=16)),
        ("name", models.CharField(max_length=255)),
        ("details", models.TextField(blank=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Brand",
            fields=_base_fields(),
            options={
                "db_table": "catalog_brand",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Category",
            fields=_base_fields(),
            options={
                "db_table": "catalog_category",
                "ordering": ["-created_at"],
                "verbose_name_plural": "categories",
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=_base_fields() + [
                ("model", models.CharField(blank=True, max_length=255)),
                (
                    "brand",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.brand",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "db_table": "catalog_product",
                "ordering": ["-created_at"],
            },
        ),
    ]

import django.db.models.deletion
from django.db import migrations, models


STATUS_CHOICES = [("active", "Active"), ("inactive", "Inactive")]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="active", max_length=16)),
                ("name", models.CharField(max_length=255)),
                ("details", models.TextField(blank=True)),
                ("contact_person", models.CharField(blank=True, max_length=255)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("address", models.TextField(blank=True)),
            ],
            options={
                "db_table": "customers_customer",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="active", max_length=16)),
                ("display_name", models.CharField(max_length=255)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("contact_person", models.CharField(blank=True, max_length=255)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone1", models.CharField(blank=True, max_length=32)),
                ("phone2", models.CharField(blank=True, max_length=32)),
                ("address", models.TextField(blank=True)),
                ("city", models.CharField(blank=True, max_length=128)),
                ("state", models.CharField(blank=True, max_length=128)),
                ("pin", models.CharField(blank=True, max_length=16)),
                ("gstin", models.CharField(blank=True, max_length=32)),
                ("pan", models.CharField(blank=True, max_length=16)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="locations",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "db_table": "customers_location",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["customer", "created_at"], name="location_customer_created_idx"),
                ],
            },
        ),
    ]

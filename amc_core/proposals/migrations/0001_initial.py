from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


def _money(max_digits=12):
    return models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=max_digits)


def _timestamps():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("billing", "0001_initial"),
        ("catalog", "0001_initial"),
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AmcProposal",
            fields=_timestamps() + [
                ("proposalno", models.CharField(max_length=64, unique=True)),
                ("proposaldate", models.DateField()),
                ("amc_start_date", models.DateField()),
                ("amc_end_date", models.DateField()),
                ("contract_no", models.CharField(blank=True, max_length=128)),
                ("billing_address", models.TextField(blank=True)),
                ("doclink", models.URLField(blank=True, max_length=1024)),
                ("terms_conditions", models.TextField(blank=True)),
                ("additional_charge", _money()),
                ("discount", _money()),
                ("tax_rate", _money(max_digits=5)),
                ("total", _money()),
                ("tax_amount", _money()),
                ("grand_total", _money()),
                (
                    "proposal_status",
                    models.CharField(
                        choices=[
                            ("new", "New"),
                            ("sent", "Sent"),
                            ("accepted", "Accepted"),
                            ("rejected", "Rejected"),
                        ],
                        db_index=True,
                        default="new",
                        max_length=16,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="proposals",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "db_table": "proposals_amc_proposal",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["customer", "created_at"], name="proposal_customer_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProposalItem",
            fields=_timestamps() + [
                ("serial_no", models.CharField(blank=True, max_length=128)),
                ("sac_code", models.CharField(blank=True, max_length=32)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("rate", _money()),
                ("amount", _money()),
                (
                    "proposal",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="proposals.amcproposal",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="proposal_items",
                        to="catalog.product",
                    ),
                ),
                (
                    "location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="proposal_items",
                        to="customers.location",
                    ),
                ),
                (
                    "invoice",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="proposal_items",
                        to="billing.invoice",
                    ),
                ),
            ],
            options={
                "db_table": "proposals_proposal_item",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["proposal", "created_at"], name="proposal_item_proposal_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProposalDocument",
            fields=_timestamps() + [
                ("proposalno", models.CharField(db_index=True, max_length=64)),
                ("doclink", models.URLField(max_length=1024)),
                ("created_by", models.CharField(max_length=254)),
            ],
            options={
                "db_table": "proposals_proposal_document",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="EmailRecord",
            fields=_timestamps() + [
                ("proposalno", models.CharField(db_index=True, max_length=64)),
                ("email", models.EmailField(max_length=254)),
                (
                    "status",
                    models.CharField(choices=[("sent", "Sent"), ("failed", "Failed")], max_length=16),
                ),
                ("sent_by", models.CharField(max_length=254)),
                ("message", models.TextField(blank=True)),
            ],
            options={
                "db_table": "proposals_email_record",
                "ordering": ["-created_at"],
            },
        ),
    ]

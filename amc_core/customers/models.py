# amc_core/customers/models.py
from __future__ import annotations

from django.db import models

from amc_core.common.models import MasterDataModel


class Customer(MasterDataModel):
    name = models.CharField(max_length=255)
    details = models.TextField(blank=True)
    contact_person = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)

    class Meta:
        db_table = "customers_customer"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Location(MasterDataModel):
    """
    A customer site where covered equipment is installed.
    """
    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        related_name="locations",
        null=True,
        blank=True,
    )

    display_name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    contact_person = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    phone1 = models.CharField(max_length=32, blank=True)
    phone2 = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=128, blank=True)
    state = models.CharField(max_length=128, blank=True)
    pin = models.CharField(max_length=16, blank=True)
    gstin = models.CharField(max_length=32, blank=True)
    pan = models.CharField(max_length=16, blank=True)

    class Meta:
        db_table = "customers_location"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="location_customer_created_idx"),
        ]

    def __str__(self) -> str:
        return self.display_name

# amc_core/catalog/models.py
from __future__ import annotations

from django.db import models

from amc_core.common.models import MasterDataModel


class Brand(MasterDataModel):
    name = models.CharField(max_length=255)
    details = models.TextField(blank=True)

    class Meta:
        db_table = "catalog_brand"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Category(MasterDataModel):
    name = models.CharField(max_length=255)
    details = models.TextField(blank=True)

    class Meta:
        db_table = "catalog_category"
        ordering = ["-created_at"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(MasterDataModel):
    """
    Equipment model that can appear on invoice and proposal lines.
    """
    name = models.CharField(max_length=255)
    details = models.TextField(blank=True)
    model = models.CharField(max_length=255, blank=True)

    brand = models.ForeignKey(Brand, on_delete=models.SET_NULL, related_name="products", null=True, blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "catalog_product"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name

# amc_core/customers/apps.py
from django.apps import AppConfig


class CustomersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amc_core.customers"
    label = "customers"

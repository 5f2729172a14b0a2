# amc_core/iam/management/commands/ensure_admin.py

import os

from django.core.management.base import BaseCommand, CommandError

from amc_core.iam.services import AdminUserService


class Command(BaseCommand):
    help = "Ensure the bootstrap admin account exists and is active (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL", ""))
        parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD", ""))
        parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Administrator"))

    def handle(self, *args, **options):
        email = options["email"]
        password = options["password"]
        if not email or not password:
            raise CommandError("Provide --email/--password or ADMIN_EMAIL/ADMIN_PASSWORD.")

        user, created = AdminUserService.ensure_admin(email=email, password=password, name=options["name"])

        verb = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"Admin {user.email} {verb}."))

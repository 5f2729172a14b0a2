# amc_core/common/api/params.py
from __future__ import annotations

from rest_framework.exceptions import NotFound, ValidationError


def int_or_none(value: str | None, field_name: str) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(str(value))
    except ValueError:
        raise ValidationError({field_name: "Must be an integer id."})


def path_id(pk) -> int:
    """Detail-route pk -> int. Anything else reads as a missing record."""
    try:
        return int(str(pk))
    except ValueError:
        raise NotFound()

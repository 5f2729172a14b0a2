# amc_core/common/patch.py
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Patch:
    """
    Base for explicit per-entity update structures.

    Every field defaults to UNSET, so "not provided" and "set to None" stay
    distinguishable for nullable columns.
    """

    @classmethod
    def from_data(cls, data: Mapping[str, Any]):
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in names})

    def provided(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def __bool__(self) -> bool:
        return bool(self.provided())


def relation_ids(data: Mapping[str, Any], *names: str) -> dict[str, Any]:
    """
    Serializer output -> service kwargs: {"customer": <Customer 3>} -> {"customer_id": 3}.
    Keys that are absent stay absent; explicit None stays None.
    """
    out = dict(data)
    for name in names:
        if name in out:
            obj = out.pop(name)
            out[f"{name}_id"] = obj.pk if obj is not None else None
    return out

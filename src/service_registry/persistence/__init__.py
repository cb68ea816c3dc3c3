"""Persisted activation lists.

Public surface
--------------
- ActivationRecord         - (provider stable name, enabled) pair
- ActivationListStore      - per-category ``.properties`` files on disk
- parse_activation_list    - text -> records
- format_activation_list   - records -> text
"""
from __future__ import annotations

from service_registry.persistence.codec import (
    ActivationRecord,
    format_activation_list,
    parse_activation_list,
)
from service_registry.persistence.store import ActivationListStore

__all__ = [
    "ActivationListStore",
    "ActivationRecord",
    "format_activation_list",
    "parse_activation_list",
]

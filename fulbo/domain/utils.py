from __future__ import annotations

from collections.abc import Iterable
from typing import Dict

from fulbo.domain.models import PLAYER_SCALAR_FIELDS, PlayerRecord


def identity_key(record: PlayerRecord) -> str:
    """Profile id when known, else the lowercased name with spaces as underscores."""
    if record.identity:
        return record.identity
    return record.display_name.strip().lower().replace(" ", "_")


def _union_into(target: list[str], values: Iterable[str]) -> None:
    for value in values:
        if value and value not in target:
            target.append(value)


def merge_player_records(records: Iterable[PlayerRecord]) -> Dict[str, PlayerRecord]:
    """Collapse records sharing an identity key.

    The first non-empty value of every scalar field wins; nationalities are
    unioned in first-seen order. Inputs are not mutated and the result keeps
    first-seen key order. Records without any usable key are dropped.
    """
    merged: Dict[str, PlayerRecord] = {}
    for record in records:
        key = identity_key(record)
        if not key:
            continue
        existing = merged.get(key)
        if existing is None:
            fresh = record.model_copy(update={"identity": key, "nationalities": []})
            _union_into(fresh.nationalities, record.nationalities)
            merged[key] = fresh
            continue
        for field in PLAYER_SCALAR_FIELDS:
            if not getattr(existing, field) and getattr(record, field):
                setattr(existing, field, getattr(record, field))
        _union_into(existing.nationalities, record.nationalities)
    return merged

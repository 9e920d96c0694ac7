"""Team document persistence.

One ``<team_id>.json`` per team, always fully overwritten. Writes go to a
temporary file in the target directory and are moved into place with
``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from fulbo.domain.models import PlayerRecord, TeamDocument
from fulbo.domain.utils import merge_player_records

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class PersistenceError(Exception):
    """A team document could not be written or read."""


def save_team_document(team_label: str, records: Iterable[PlayerRecord], path: PathLike) -> TeamDocument:
    """Merge ``records`` and write them as the team document at ``path``."""
    merged = merge_player_records(records)
    document = TeamDocument(team=team_label, players=list(merged.values()))
    target = Path(path)
    payload = json.dumps(document.to_document(), ensure_ascii=False, indent=2)

    tmp_name = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}-", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise PersistenceError(f"cannot write {target}: {e}") from e

    logger.info("Saved %d players for %s to %s", len(document.players), team_label, target)
    return document


def load_team_document(path: PathLike) -> TeamDocument:
    try:
        with open(path, encoding="utf-8") as fh:
            return TeamDocument.model_validate(json.load(fh))
    except (OSError, ValueError, ValidationError) as e:
        raise PersistenceError(f"cannot read {path}: {e}") from e


def read_team_label(path: PathLike) -> str:
    """The ``team`` field of a document, or the file stem when unreadable."""
    try:
        label = load_team_document(path).team
    except PersistenceError:
        return Path(path).stem
    return label or Path(path).stem

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from flip7tracker.engine.history import HistoryEntry
from flip7tracker.engine.serialize import snapshot
from flip7tracker.engine.session import TrackerConfig, TrackerSession, new_session
from flip7tracker.engine.types import CardKind, is_card_kind

SNAPSHOT_FIELDS = ("deck", "hand", "sortByProbability", "history")


class SnapshotError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotError(f"Missing file: {path}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e


def load_schema(schema_dir: Path) -> dict[str, object]:
    schema = _load_json(schema_dir / "snapshot.schema.json")
    if not isinstance(schema, dict):
        raise SnapshotError("snapshot.schema.json must be an object")
    Draft202012Validator.check_schema(schema)
    return schema


def validate_snapshot(instance: object, schema: Mapping[str, object], *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Snapshot validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise SnapshotError("\n".join(lines))


def _field_validators(schema: Mapping[str, object]) -> dict[str, Draft202012Validator]:
    props = schema.get("properties", {})
    defs = schema.get("$defs", {})
    out: dict[str, Draft202012Validator] = {}
    if not isinstance(props, dict):
        return out
    for name in SNAPSHOT_FIELDS:
        sub = props.get(name)
        if isinstance(sub, dict):
            # keep $defs alongside so "#/$defs/card" refs resolve
            out[name] = Draft202012Validator({"$defs": defs, **sub})
    return out


@dataclass(frozen=True)
class LoadResult:
    session: TrackerSession
    fallbacks: tuple[str, ...]  # fields replaced by their defaults


def restore(
    raw: object,
    schema: Mapping[str, object],
    config: TrackerConfig | None = None,
) -> LoadResult:
    """Rebuild a session from a stored payload.

    Each field is checked on its own; one that is missing or fails the
    schema falls back to its default while the rest are kept.
    """
    if not isinstance(raw, dict):
        return LoadResult(session=new_session(config=config), fallbacks=SNAPSHOT_FIELDS)

    validators = _field_validators(schema)
    accepted: dict[str, object] = {}
    fallbacks: list[str] = []
    for name in SNAPSHOT_FIELDS:
        value = raw.get(name)
        v = validators.get(name)
        if value is None or v is None or not v.is_valid(value):
            fallbacks.append(name)
            continue
        accepted[name] = value

    deck: dict[CardKind, int] | None = None
    deck_raw = accepted.get("deck")
    if isinstance(deck_raw, dict):
        # labels absent from a stored deck count as zero
        deck = {k: int(v) for k, v in deck_raw.items() if is_card_kind(k)}

    hand: list[CardKind] | None = None
    hand_raw = accepted.get("hand")
    if isinstance(hand_raw, list):
        hand = [c for c in hand_raw if is_card_kind(c)]

    history: list[HistoryEntry] | None = None
    history_raw = accepted.get("history")
    if isinstance(history_raw, list):
        history = [
            HistoryEntry(action=e["action"], card=e["card"])
            for e in history_raw
            if isinstance(e, dict) and is_card_kind(e.get("card"))
        ]

    sort_raw = accepted.get("sortByProbability")
    sort_pref = sort_raw if isinstance(sort_raw, bool) else None

    session = new_session(
        config=config,
        deck=deck,
        hand=hand,
        history=history,
        sort_by_probability=sort_pref,
    )
    return LoadResult(session=session, fallbacks=tuple(fallbacks))


class SnapshotStore:
    """Loads and saves a session as a JSON file.

    A corrupt or unreadable file never fails a load; a failed write raises
    :class:`SnapshotError` and leaves the in-memory session alone.
    """

    def __init__(self, path: Path, schema_dir: Path, config: TrackerConfig | None = None) -> None:
        self._path = path
        self._config = config
        self._schema = load_schema(schema_dir)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> LoadResult:
        if not self._path.exists():
            return LoadResult(session=new_session(config=self._config), fallbacks=SNAPSHOT_FIELDS)
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            raw = None
        return restore(raw, self._schema, config=self._config)

    def save(self, session: TrackerSession) -> None:
        data = snapshot(session)
        validate_snapshot(data, self._schema, context=str(self._path))
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise SnapshotError(f"Could not write {self._path}: {e}") from e

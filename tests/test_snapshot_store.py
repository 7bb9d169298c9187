from __future__ import annotations

import json
from pathlib import Path

import pytest

from flip7tracker.engine.serialize import snapshot
from flip7tracker.client.pygame_app.app import GameContext
from flip7tracker.engine.session import TrackerConfig, new_session
from flip7tracker.engine.types import CATALOG, default_counts
from flip7tracker.paths import get_paths
from flip7tracker.services.snapshot_store import (
    SNAPSHOT_FIELDS,
    SnapshotError,
    SnapshotStore,
    load_schema,
    restore,
)
from flip7tracker.services.telemetry import TelemetryService


def _store(path: Path) -> SnapshotStore:
    return SnapshotStore(path=path, schema_dir=get_paths().schema_dir)


def _write(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    session = new_session()
    session.play_card("3")
    session.draw_to_hand("7")
    session.draw_to_hand("5")
    session.set_custom_count("x2", 0)
    session.set_sort_preference(False)

    store = _store(tmp_path / "state.json")
    store.save(session)

    loaded = _store(tmp_path / "state.json").load()
    assert loaded.fallbacks == ()
    assert snapshot(loaded.session) == snapshot(session)
    assert loaded.session.hand_cards() == ["7", "5"]
    assert loaded.session.sort_by_probability is False
    # undo still works on the restored history
    assert loaded.session.undo()
    assert loaded.session.hand_cards() == ["7"]


def test_saved_file_shape(tmp_path: Path) -> None:
    session = new_session()
    session.draw_to_hand("9")
    store = _store(tmp_path / "state.json")
    store.save(session)
    raw = json.loads((tmp_path / "state.json").read_text(encoding="utf-8"))
    assert raw["version"] == 1
    assert raw["hand"] == ["9"]
    assert raw["sortByProbability"] is True
    assert raw["history"] == [{"action": "drawn", "card": "9"}]
    assert raw["deck"]["9"] == 8


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    loaded = _store(tmp_path / "nope.json").load()
    assert loaded.fallbacks == SNAPSHOT_FIELDS
    assert loaded.session.deck_counts() == default_counts()
    assert loaded.session.hand_cards() == []
    assert loaded.session.history_entries() == []
    assert loaded.session.sort_by_probability is True


def test_invalid_json_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    loaded = _store(path).load()
    assert loaded.fallbacks == SNAPSHOT_FIELDS
    assert loaded.session.deck_counts() == default_counts()


def test_non_object_payload_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    _write(path, [1, 2, 3])
    loaded = _store(path).load()
    assert loaded.fallbacks == SNAPSHOT_FIELDS
    assert loaded.session.hand_cards() == []


def test_bad_fields_fall_back_individually(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    _write(
        path,
        {
            "deck": {"7": -1},
            "hand": ["5", "nope"],
            "sortByProbability": "yes",
            "history": [{"action": "played", "card": "3"}],
        },
    )
    loaded = _store(path).load()
    assert loaded.fallbacks == ("deck", "hand", "sortByProbability")
    assert loaded.session.deck_counts() == default_counts()
    assert loaded.session.hand_cards() == []
    assert loaded.session.sort_by_probability is True
    assert [(e.action, e.card) for e in loaded.session.history_entries()] == [("played", "3")]


def test_deck_with_unknown_card_or_bool_is_rejected() -> None:
    schema = load_schema(get_paths().schema_dir)
    assert "deck" in restore({"deck": {"13": 1}}, schema).fallbacks
    assert "deck" in restore({"deck": {"7": True}}, schema).fallbacks
    assert "deck" in restore({"deck": {"7": 1.5}}, schema).fallbacks
    assert "deck" in restore({"deck": ["7"]}, schema).fallbacks


def test_history_entry_with_unknown_action_is_rejected() -> None:
    schema = load_schema(get_paths().schema_dir)
    result = restore({"history": [{"action": "hand", "card": "3"}]}, schema)
    assert "history" in result.fallbacks
    assert result.session.history_entries() == []


def test_partial_deck_reads_missing_cards_as_zero() -> None:
    schema = load_schema(get_paths().schema_dir)
    result = restore({"deck": {"7": 2, "freeze": 1}}, schema)
    assert "deck" not in result.fallbacks
    assert result.session.deck_count("7") == 2
    assert result.session.deck_count("freeze") == 1
    assert result.session.deck_count("12") == 0
    assert result.session.total_remaining() == 3


def test_failed_save_leaves_session_untouched(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = _store(blocker / "state.json")

    session = new_session()
    session.draw_to_hand("8")
    before = snapshot(session)
    with pytest.raises(SnapshotError):
        store.save(session)
    assert snapshot(session) == before
    assert session.undo()


def test_missing_schema_dir_is_a_hard_error(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError):
        SnapshotStore(path=tmp_path / "state.json", schema_dir=tmp_path)


def test_telemetry_appends_jsonl(tmp_path: Path) -> None:
    telemetry = TelemetryService(tmp_path / "logs" / "telemetry.jsonl")
    telemetry.log("boot", {"ok": True})
    telemetry.log("snapshot_save_failed", {"error": "disk full"})
    events = telemetry.events()
    assert [e["type"] for e in events] == ["boot", "snapshot_save_failed"]
    assert telemetry.events("boot")[0]["payload"] == {"ok": True}

    muted = TelemetryService(tmp_path / "muted.jsonl", enabled=False)
    muted.log("boot", {"ok": True})
    assert muted.events() == []


def test_persist_swallows_unwritable_store_and_telemetry(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    session = new_session()
    session.draw_to_hand("8")
    before = snapshot(session)
    ctx = GameContext(
        screen=None,  # type: ignore[arg-type]
        clock=None,  # type: ignore[arg-type]
        paths=get_paths(),
        assets=None,  # type: ignore[arg-type]
        telemetry=TelemetryService(blocker / "telemetry.jsonl"),
        config=TrackerConfig(),
        store=_store(blocker / "state.json"),
        session=session,
    )
    ctx.persist()
    assert snapshot(session) == before
    assert session.undo()


def test_persist_logs_failed_save(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    telemetry = TelemetryService(tmp_path / "telemetry.jsonl")
    ctx = GameContext(
        screen=None,  # type: ignore[arg-type]
        clock=None,  # type: ignore[arg-type]
        paths=get_paths(),
        assets=None,  # type: ignore[arg-type]
        telemetry=telemetry,
        config=TrackerConfig(),
        store=_store(blocker / "state.json"),
        session=new_session(),
    )
    ctx.persist()
    assert len(telemetry.events("snapshot_save_failed")) == 1


def test_restored_cards_are_catalog_labels() -> None:
    schema = load_schema(get_paths().schema_dir)
    result = restore(
        {
            "deck": {"7": 2},
            "hand": ["x2", "freeze"],
            "history": [{"action": "drawn", "card": "freeze"}],
        },
        schema,
    )
    session = result.session
    assert all(c in CATALOG for c in session.hand_cards())
    assert all(e.card in CATALOG for e in session.history_entries())
    assert set(session.deck_counts()) == set(CATALOG)
    assert session.hand_cards() == ["x2", "freeze"]


def test_telemetry_skips_truncated_lines(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    good = json.dumps({"ts": "t0", "type": "boot", "payload": {}})
    later = json.dumps({"ts": "t1", "type": "snapshot_loaded", "payload": {}})
    path.write_text(f'{good}\n{{"ts": "x", "ty\n[1, 2]\n{later}\n', encoding="utf-8")
    events = TelemetryService(path).events()
    assert [e["type"] for e in events] == ["boot", "snapshot_loaded"]

"""Tests for session identity assignment, assembly and the session library."""

import json
from datetime import timedelta
from pathlib import Path

import pytest

from garlic.errors import MissingAsset, NotFound
from garlic.instructions import NIL_ID, MoveAction, SayAndMoveAction, SpeakAction, is_random_id, new_id
from garlic.moves import MoveLibrary
from garlic.sessions import Session, SessionItem, SessionLibrary, assemble_sessions, assign_ids


def _session(name="Session 1", audio="", move="", delay=timedelta(0)) -> Session:
    return Session(
        name=name,
        items=[
            SessionItem(actions=[
                SayAndMoveAction(
                    say_item=SpeakAction(phrase="Hello", file_path=audio),
                    move_item=MoveAction(name=move, delay=delay),
                ),
            ]),
        ],
    )


# ── assign_ids ──────────────────────────────────────────


def test_assign_ids_fills_every_level():
    session = assign_ids(_session())
    action = session.items[0].actions[0]
    for node in (session, session.items[0], action, action.say_item, action.move_item):
        assert is_random_id(node.id)


def test_assign_ids_is_pure_and_idempotent():
    original = _session()
    filled = assign_ids(original)
    assert original.id == NIL_ID
    assert original.items[0].actions[0].id == NIL_ID
    assert assign_ids(filled) == filled


def test_assign_ids_keeps_existing():
    session = _session()
    session.id = new_id()
    session.items[0].actions[0].move_item.id = new_id()
    filled = assign_ids(session)
    assert filled.id == session.id
    assert filled.items[0].actions[0].move_item.id == session.items[0].actions[0].move_item.id


# ── assemble_sessions ───────────────────────────────────


def test_audio_resolved_under_session_folder(audio_dir: Path):
    [session] = assemble_sessions([_session(audio="intro.wav")], audio_dir, MoveLibrary())
    say = session.items[0].actions[0].say_item
    assert say.file_path == str(audio_dir / "Session 1" / "intro.wav")


def test_audio_path_layout():
    """'intro.wav' for "Session 1" under /assets is /assets/Session 1/intro.wav."""
    with pytest.raises(MissingAsset) as exc:
        assemble_sessions([_session(audio="intro.wav")], Path("/assets"), MoveLibrary())
    assert "/assets/Session 1/intro.wav" in str(exc.value)


def test_missing_audio_aborts_whole_assembly(audio_dir: Path):
    good = _session(audio="intro.wav")
    bad = _session(name="Session 2", audio="intro.wav")
    with pytest.raises(MissingAsset):
        assemble_sessions([good, bad], audio_dir, MoveLibrary())


def test_library_move_overlays_delay(moves_dir: Path, audio_dir: Path):
    moves = MoveLibrary.scan(moves_dir)
    [session] = assemble_sessions(
        [_session(move="hello_a010", delay=timedelta(seconds=5))], audio_dir, moves
    )
    move = session.items[0].actions[0].move_item
    assert move.file_path.endswith("hello_a010.qianim")
    assert move.group == "greetings"
    assert move.delay == 5_000_000_000
    # the library entry itself keeps its own delay
    assert moves.get_by_name("hello_a010").delay == 0


def test_unknown_move_left_as_authored(moves_dir: Path, audio_dir: Path):
    [session] = assemble_sessions([_session(move="dance_b002")], audio_dir, MoveLibrary.scan(moves_dir))
    move = session.items[0].actions[0].move_item
    assert move.name == "dance_b002"
    assert move.file_path == ""


def test_assembly_does_not_touch_input(audio_dir: Path):
    authored = _session(audio="intro.wav")
    assemble_sessions([authored], audio_dir, MoveLibrary())
    assert authored.items[0].actions[0].say_item.file_path == "intro.wav"


# ── SessionLibrary ──────────────────────────────────────


def _library(data_dir, moves_dir, audio_dir) -> SessionLibrary:
    return SessionLibrary.open(data_dir / "sessions.json", MoveLibrary.scan(moves_dir), audio_dir)


def test_library_create_and_lookup(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    created = library.create(_session(audio="intro.wav", move="hello_a010"))

    authored = library.store.get(created.id)
    assert authored.items[0].actions[0].say_item.file_path == "intro.wav"

    assembled = library.get(str(created.id))
    action = assembled.items[0].actions[0]
    assert action.say_item.file_path == str(audio_dir / "Session 1" / "intro.wav")

    found = library.get_instruction(action.id)
    assert found is not None
    assert found.move_item.group == "greetings"
    assert library.get_instruction(new_id()) is None


def test_library_rejects_session_with_missing_audio(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    with pytest.raises(MissingAsset):
        library.create(_session(audio="nope.wav"))
    assert library.store.list() == []


def test_library_open_fails_on_missing_audio(data_dir, moves_dir, audio_dir):
    path = data_dir / "sessions.json"
    path.write_text(json.dumps([_session(audio="nope.wav").model_dump(by_alias=True, mode="json")]))
    with pytest.raises(MissingAsset):
        _library(data_dir, moves_dir, audio_dir)


def test_library_update_and_delete(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    created = library.create(_session())
    created.description = "Updated"
    library.update(created)
    assert library.sessions()[0].description == "Updated"

    library.delete(str(created.id))
    assert library.sessions() == []
    with pytest.raises(NotFound):
        library.get(created.id)


def test_failed_create_leaves_store_and_view_alone(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    created = library.create(_session(audio="intro.wav"))
    (audio_dir / "Session 1" / "intro.wav").unlink()

    with pytest.raises(MissingAsset):
        library.create(_session(name="Other"))

    assert [s.name for s in library.store.list()] == ["Session 1"]
    assert [s.name for s in library.sessions()] == ["Session 1"]
    assert library.get(created.id).name == "Session 1"


def test_failed_update_leaves_store_alone(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    created = library.create(_session())
    created.description = "Updated"
    created.items[0].actions[0].say_item.file_path = "nope.wav"

    with pytest.raises(MissingAsset):
        library.update(created)

    assert library.store.get(created.id).description == ""
    assert library.get(created.id).description == ""


def test_failed_delete_keeps_session(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    keep = library.create(_session(audio="intro.wav"))
    drop = library.create(_session(name="Other"))
    (audio_dir / "Session 1" / "intro.wav").unlink()

    with pytest.raises(MissingAsset):
        library.delete(drop.id)

    assert [s.id for s in library.store.list()] == [keep.id, drop.id]
    assert library.get(drop.id).name == "Other"


def test_get_unknown_session_raises_not_found(data_dir, moves_dir, audio_dir):
    library = _library(data_dir, moves_dir, audio_dir)
    library.create(_session())
    with pytest.raises(NotFound):
        library.get(new_id())

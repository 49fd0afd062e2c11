"""Tests for move library scanning."""

import pytest

from garlic.errors import InvalidIdentifier, NotFound
from garlic.instructions import is_random_id, new_id
from garlic.moves import MoveLibrary, collect_moves


def test_collect_moves(moves_dir):
    moves = collect_moves(moves_dir)
    by_name = {m.name: m for m in moves}
    assert set(by_name) == {"hello_a010", "NiceReaction_01"}
    hello = by_name["hello_a010"]
    assert hello.group == "greetings"
    assert hello.file_path == str(moves_dir / "greetings" / "hello_a010.qianim")
    assert hello.is_valid()


def test_collect_ignores_other_files(moves_dir):
    (moves_dir / "greetings" / "notes.txt").write_text("x")
    assert len(collect_moves(moves_dir)) == 2


def test_collect_only_one_level_down(moves_dir):
    (moves_dir / "loose.qianim").write_text("x")
    (moves_dir / "greetings" / "extra").mkdir()
    (moves_dir / "greetings" / "extra" / "deep.qianim").write_text("x")
    names = {m.name for m in collect_moves(moves_dir)}
    assert names == {"hello_a010", "NiceReaction_01"}


def test_collect_missing_dir(data_dir):
    assert collect_moves(data_dir / "nowhere") == []


def test_groups(moves_dir):
    library = MoveLibrary.scan(moves_dir)
    assert library.groups() == ["greetings", "reactions"]
    assert [m.name for m in library.by_group()["reactions"]] == ["NiceReaction_01"]


def test_get_by_name_returns_copy(moves_dir):
    library = MoveLibrary.scan(moves_dir)
    move = library.get_by_name("hello_a010")
    move.group = "changed"
    assert library.get_by_name("hello_a010").group == "greetings"
    assert library.get_by_name("missing") is None


def test_get_by_id(moves_dir):
    library = MoveLibrary.scan(moves_dir)
    move = library.list()[0]
    assert is_random_id(move.id)
    assert library.get(str(move.id)) == move
    with pytest.raises(NotFound):
        library.get(new_id())
    with pytest.raises(InvalidIdentifier):
        library.get("x")

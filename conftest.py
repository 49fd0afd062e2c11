import shutil
from pathlib import Path

import pytest

from backend.config import Settings

TEST_DATA_DIR = Path("data-tests")

HELLO_MOVE = "<?xml version='1.0'?><Animation name='hello_a010'/>"


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-create data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    TEST_DATA_DIR.mkdir()
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


@pytest.fixture
def data_dir() -> Path:
    return TEST_DATA_DIR


@pytest.fixture
def moves_dir(data_dir: Path) -> Path:
    """Two groups of motion files: greetings/hello_a010, reactions/NiceReaction_01."""
    root = data_dir / "moves"
    (root / "greetings").mkdir(parents=True)
    (root / "reactions").mkdir(parents=True)
    (root / "greetings" / "hello_a010.qianim").write_text(HELLO_MOVE)
    (root / "reactions" / "NiceReaction_01.qianim").write_text("<Animation name='nice'/>")
    return root


@pytest.fixture
def audio_dir(data_dir: Path) -> Path:
    """Audio folder with Session 1/intro.wav."""
    root = data_dir / "audio"
    (root / "Session 1").mkdir(parents=True)
    (root / "Session 1" / "intro.wav").write_bytes(b"RIFF....WAVE")
    return root


@pytest.fixture
def settings(data_dir: Path, moves_dir: Path, audio_dir: Path) -> Settings:
    return Settings(
        data_dir=data_dir,
        sessions_file=data_dir / "sessions.json",
        images_file=data_dir / "images.json",
        moves_dir=moves_dir,
        audio_dir=audio_dir,
        upload_dir=data_dir / "uploads",
    )

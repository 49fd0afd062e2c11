"""Server settings read from the environment (and .env, if present).

    DATA_DIR       Root of all data (default: ./data)
    SESSIONS_FILE  Session store (default: $DATA_DIR/sessions.json)
    IMAGES_FILE    Image store (default: $DATA_DIR/images.json)
    MOVES_DIR      Scanned .qianim motions (default: $DATA_DIR/moves)
    AUDIO_DIR      Session audio, one subfolder per session (default: $DATA_DIR/audio)
    UPLOAD_DIR     Uploaded images (default: $DATA_DIR/uploads)
    HOST, PORT     Bind address for the dev server
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = ROOT / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    sessions_file: Path
    images_file: Path
    moves_dir: Path
    audio_dir: Path
    upload_dir: Path
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, data_dir: Path | None = None) -> "Settings":
        """Build settings from env vars. An explicit data_dir wins over DATA_DIR."""
        load_dotenv(ROOT / ".env")
        base = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))

        def path_var(name: str, default: Path) -> Path:
            value = os.getenv(name, "")
            return Path(value) if value else default

        return cls(
            data_dir=base,
            sessions_file=path_var("SESSIONS_FILE", base / "sessions.json"),
            images_file=path_var("IMAGES_FILE", base / "images.json"),
            moves_dir=path_var("MOVES_DIR", base / "moves"),
            audio_dir=path_var("AUDIO_DIR", base / "audio"),
            upload_dir=path_var("UPLOAD_DIR", base / "uploads"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
        )

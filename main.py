"""Garlic dev launcher. Starts the API server."""

import argparse
import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "8080")


def main():
    parser = argparse.ArgumentParser(description="Garlic robot control server")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=int(PORT))
    parser.add_argument("--demo", action="store_true",
                        help="Replace stored sessions with demo sessions")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # The app factory reads DATA_DIR, so pass --data-dir on through the env
    if args.data_dir:
        os.environ["DATA_DIR"] = str(args.data_dir.resolve())

    if args.demo:
        from backend.config import Settings
        from backend.demo import create_demo_data
        from garlic.moves import MoveLibrary
        from garlic.sessions import SessionLibrary

        settings = Settings.from_env(args.data_dir)
        library = SessionLibrary.open(
            settings.sessions_file, MoveLibrary.scan(settings.moves_dir), settings.audio_dir
        )
        create_demo_data(library)

    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run("backend.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()

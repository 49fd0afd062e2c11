"""Image library: uploaded pictures shown next to sessions in the UI.

Each Image record points to a file under the upload directory. The library
owns those files: deleting a record deletes its file, and if the file can't
be removed the record is kept so the catalogue and the disk never disagree.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from garlic.instructions import NIL_ID
from garlic.store import RecordStore

logger = logging.getLogger(__name__)


class Image(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default=NIL_ID, alias="ID")
    name: str = Field(default="", alias="Name")
    group: str = Field(default="", alias="Group")
    file_path: str = Field(default="", alias="FilePath")


def slugify(text: str) -> str:
    """Convert a label to a filesystem-safe directory name.

    "Animals & Pets" → "animals-pets"
    """
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return text or "untitled"


def _remove_file(image: Image) -> None:
    Path(image.file_path).unlink()


class ImageLibrary:
    def __init__(self, store: RecordStore[Image], upload_dir: Path) -> None:
        self.store = store
        self.upload_dir = Path(upload_dir)

    @classmethod
    def open(cls, path: Path, upload_dir: Path) -> ImageLibrary:
        return cls(RecordStore(path, Image), upload_dir)

    def list(self) -> list[Image]:
        return self.store.list()

    def get(self, id: str | UUID) -> Image:
        return self.store.get(id)

    def create(self, image: Image) -> Image:
        return self.store.create(image)

    def update(self, image: Image) -> Image:
        return self.store.update(image)

    def delete(self, id: str | UUID) -> None:
        """Delete the record and its file. OSError from the file removal propagates."""
        self.store.delete(id, before_remove=_remove_file)
        logger.info(f"Deleted image {id}")

    def groups(self) -> list[str]:
        return sorted({image.group for image in self.store.list()})

    def save_upload(self, name: str, group: str, filename: str, data: bytes) -> Image:
        """Write uploaded bytes to <upload_dir>/<group>/<filename> and catalogue them."""
        target_dir = self.upload_dir / slugify(group) if group else self.upload_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / Path(filename).name
        if path.exists():
            raise FileExistsError(f"Image file {path} already exists")
        path.write_bytes(data)
        try:
            image = self.create(Image(name=name or path.stem, group=group, file_path=str(path)))
        except Exception:
            path.unlink(missing_ok=True)
            raise
        logger.info(f"Uploaded image {image.name!r} to {path}")
        return image

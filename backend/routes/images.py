"""Image library endpoints (upload, CRUD, groups)."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from garlic.errors import InvalidIdentifier, NotFound
from garlic.images import Image, ImageLibrary

from .deps import get_images

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/images")
async def list_images(library: ImageLibrary = Depends(get_images)):
    """List all images."""
    return library.list()


@router.get("/images/groups")
async def list_image_groups(library: ImageLibrary = Depends(get_images)):
    """List image group labels, sorted."""
    return library.groups()


@router.post("/images", status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    name: str = Form(""),
    group: str = Form(""),
    library: ImageLibrary = Depends(get_images),
):
    """Upload an image file and add it to the library."""
    if not file.filename:
        raise HTTPException(400, "Uploaded file has no name")
    data = await file.read()
    try:
        return library.save_upload(name, group, file.filename, data)
    except FileExistsError as e:
        raise HTTPException(409, str(e))


@router.get("/images/{image_id}")
async def get_image(image_id: str, library: ImageLibrary = Depends(get_images)):
    """Get a single image record by ID."""
    try:
        return library.get(image_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Image not found")


@router.put("/images/{image_id}")
async def update_image(image_id: str, body: Image, library: ImageLibrary = Depends(get_images)):
    """Replace an image record (name, group)."""
    try:
        existing = library.get(image_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Image not found")
    # The file itself is owned by the library and can't be repointed.
    body.id = existing.id
    body.file_path = existing.file_path
    return library.update(body)


@router.delete("/images/{image_id}")
async def delete_image(image_id: str, library: ImageLibrary = Depends(get_images)):
    """Delete an image record and its file."""
    try:
        library.delete(image_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Image not found")
    except OSError as e:
        logger.warning(f"Failed to remove image file: {e}")
        raise HTTPException(500, f"Failed to remove image file: {e}")
    return {"ok": True}

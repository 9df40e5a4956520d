"""Post image upload endpoint."""

import logging
import shutil
import uuid
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from blog_api.api.dependencies import require_identity
from blog_api.config import get_settings
from blog_api.services.auth import Identity

logger = logging.getLogger(__name__)
router = APIRouter(tags=["images"])
settings = get_settings()

ALLOWED_IMAGE_TYPES = {"image/png", "image/jpg", "image/jpeg"}


def accepts_image(upload: UploadFile | None) -> bool:
    """Whether an uploaded file is an image type we store."""
    if upload is None or not upload.filename:
        return False
    return upload.content_type in ALLOWED_IMAGE_TYPES


def store_image(upload: UploadFile, images_dir: Path) -> str:
    """Write the upload into the images directory and return its relative path."""
    images_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{uuid.uuid4()}-{Path(upload.filename).name}"
    with open(images_dir / filename, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    return f"{images_dir.name}/{filename}"


def clear_image(old_path: str, images_dir: Path) -> None:
    """Delete a previously stored image. Paths outside the images directory are ignored."""
    target = (images_dir.parent / old_path).resolve()
    if target.parent != images_dir.resolve():
        logger.warning(f"Refusing to delete image outside {images_dir}: {old_path}")
        return
    try:
        target.unlink()
        logger.info(f"Deleted old image {old_path}")
    except FileNotFoundError:
        logger.warning(f"Old image {old_path} does not exist")


@router.put("/post-image")
def upload_post_image(
    identity: Annotated[Identity, Depends(require_identity)],
    image: Annotated[UploadFile | None, File()] = None,
    old_path: Annotated[str | None, Form(alias="oldPath")] = None,
):
    """Store a post image, optionally replacing a previous one.

    Files of any other type are dropped as if none was sent.
    """
    if not accepts_image(image):
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "No image provided!"})

    images_dir = Path(settings.images_dir)
    file_path = store_image(image, images_dir)
    if old_path:
        clear_image(old_path, images_dir)

    logger.info(f"User {identity.user_id} stored image {file_path}")
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "File stored.", "filePath": file_path},
    )

"""Photo ingestion: validate → transform → persist.

Uploads are checked for size, MIME type and extension before anything is
decoded or written. Accepted images are re-encoded with Pillow:

- main image: fit inside 1920×1080 (never enlarged), progressive JPEG q85
- thumbnail: 300×300 centre cover crop, JPEG q80

If Pillow cannot process the file, the original bytes are stored unmodified
and the photo gets no thumbnail; the upload still succeeds.

Files go through Django's default storage as `photos/<name>` and
`thumbnails/thumb_<name>`, where `<name>` is generated from the client file
name, the current time in milliseconds and a random suffix.
"""

import logging
import os
import re
import time
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils.crypto import get_random_string
from PIL import Image, ImageOps

from common.exceptions import ExternalServiceFailure
from .models import Photo

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")

MAIN_MAX_SIZE = (1920, 1080)
MAIN_QUALITY = 85
THUMBNAIL_SIZE = (300, 300)
THUMBNAIL_QUALITY = 80

PHOTOS_DIR = "photos"
THUMBNAILS_DIR = "thumbnails"

_RANDOM_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


@dataclass
class ProcessedImage:
    main: bytes
    thumbnail: Optional[bytes]
    width: Optional[int]
    height: Optional[int]


# ------------------------------ validation ------------------------------

def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def upload_problem(upload) -> Optional[str]:
    """Return why an upload is not acceptable, or None."""
    max_size = settings.PHOTO_MAX_UPLOAD_SIZE
    if upload.size > max_size:
        return f"File is too large. Maximum {max_size // (1024 * 1024)}MB allowed."
    if (getattr(upload, "content_type", "") or "").lower() not in ALLOWED_MIME_TYPES:
        return "File format not allowed. Only JPEG, PNG and WebP are accepted."
    if file_extension(upload.name) not in ALLOWED_EXTENSIONS:
        return "Invalid file extension."
    return None


# ------------------------------ transformation ------------------------------

def generate_stored_name(filename: str) -> str:
    base, ext = os.path.splitext(os.path.basename(filename or "photo"))
    base = re.sub(r"[^a-zA-Z0-9]", "_", base)[:20]
    stamp = int(time.time() * 1000)
    return f"{base}_{stamp}_{get_random_string(11, _RANDOM_CHARS)}{ext.lower()}"


def _encode_jpeg(img: Image.Image, quality: int, progressive: bool = False) -> bytes:
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    buf = BytesIO()
    img.save(buf, format="JPEG", quality=quality, progressive=progressive, optimize=True)
    return buf.getvalue()


def process_image(raw: bytes) -> ProcessedImage:
    """Re-encode an upload; falls back to the raw bytes on any Pillow error."""
    width = height = None
    try:
        with Image.open(BytesIO(raw)) as img:
            width, height = img.size
            img.load()

            main = img.copy()
            main.thumbnail(MAIN_MAX_SIZE, Image.LANCZOS)
            main_bytes = _encode_jpeg(main, MAIN_QUALITY, progressive=True)

            thumb = ImageOps.fit(img, THUMBNAIL_SIZE, Image.LANCZOS, centering=(0.5, 0.5))
            thumb_bytes = _encode_jpeg(thumb, THUMBNAIL_QUALITY)
    except Exception as exc:
        logger.warning("Could not process image, storing original bytes: %s", exc)
        return ProcessedImage(main=raw, thumbnail=None, width=width, height=height)

    return ProcessedImage(main=main_bytes, thumbnail=thumb_bytes, width=width, height=height)


# ------------------------------ storage ------------------------------

def _public_url(saved_path: str) -> str:
    return f"{settings.MEDIA_URL}{saved_path}".replace("//", "/")


def _storage_path(url: Optional[str]) -> Optional[str]:
    prefix = settings.MEDIA_URL
    if not url or not url.startswith(prefix):
        return None
    return url[len(prefix):]


def ingest_upload(upload, photo_id: str, order=None, user=None) -> Photo:
    """Transform and store a validated upload and record it as a Photo."""
    raw = upload.read()
    processed = process_image(raw)

    stored_name = generate_stored_name(upload.name)
    try:
        saved_main = default_storage.save(f"{PHOTOS_DIR}/{stored_name}", ContentFile(processed.main))
    except OSError as exc:
        raise ExternalServiceFailure("disk", detail=str(exc), public_message="Could not store the photo")

    thumbnail_url = None
    if processed.thumbnail is not None:
        try:
            saved_thumb = default_storage.save(
                f"{THUMBNAILS_DIR}/thumb_{stored_name}", ContentFile(processed.thumbnail)
            )
            thumbnail_url = _public_url(saved_thumb)
        except OSError as exc:
            logger.warning("Could not save thumbnail for photo %s: %s", photo_id, exc)

    photo = Photo.objects.create(
        id=photo_id,
        order=order,
        user=user,
        filename=upload.name,
        stored_name=stored_name,
        original_url=_public_url(saved_main),
        thumbnail_url=thumbnail_url,
        size=len(processed.main),
        mime_type=upload.content_type,
        width=processed.width,
        height=processed.height,
        upload_status=Photo.UploadStatus.COMPLETED,
    )
    logger.info("Stored photo %s (%s bytes) for order %s", photo.pk, photo.size, getattr(order, "pk", None))
    return photo


def delete_photo_files(photo: Photo) -> None:
    """Remove the stored files of a photo.

    Missing files are ignored by the storage backend; other I/O errors are
    logged and do not stop the caller from deleting the row.
    """
    for url in (photo.original_url, photo.thumbnail_url):
        path = _storage_path(url)
        if path is None:
            continue
        try:
            default_storage.delete(path)
        except OSError as exc:
            logger.warning("Could not delete %s for photo %s: %s", path, photo.pk, exc)

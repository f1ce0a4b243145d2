import os
import shutil
import time
import uuid
from typing import BinaryIO

import structlog

logger = structlog.get_logger(__name__)

def ensure_upload_dir(upload_dir: str) -> None:
    """Create the upload directory if it does not exist yet"""
    if not os.path.isdir(upload_dir):
        os.makedirs(upload_dir, exist_ok=True)
        logger.info("Uploads folder created", path=os.path.abspath(upload_dir))

def make_image_filename(original_filename: str) -> str:
    """
    Millisecond timestamp plus a random token, keeping the original extension as sent.
    The token keeps same-millisecond uploads apart.
    """
    _, ext = os.path.splitext(original_filename or "")
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{ext}"

def store_image(upload_dir: str, original_filename: str, source: BinaryIO) -> str:
    """Copy an uploaded file into the upload directory and return its stored filename"""
    ensure_upload_dir(upload_dir)
    filename = make_image_filename(original_filename)
    path = os.path.join(upload_dir, filename)
    # "xb" refuses to overwrite an existing file
    with open(path, "xb") as out:
        try:
            shutil.copyfileobj(source, out)
        except BaseException:
            out.close()
            delete_image(upload_dir, filename)
            raise
    logger.info("Image stored", filename=filename)
    return filename

def delete_image(upload_dir: str, filename: str) -> None:
    """
    Remove a stored image. Failures are logged, not raised, so cleanup never
    hides the error that triggered it.
    """
    path = os.path.join(upload_dir, filename)
    try:
        os.remove(path)
        logger.info("Image removed", filename=filename)
    except FileNotFoundError:
        logger.warning("Image already missing", filename=filename)
    except OSError as e:
        logger.error("Failed to remove image", filename=filename, error=str(e))

# marketplace/uploads.py
import secrets
import shutil
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, NamedTuple, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from .log import get_logger

logger = get_logger(__name__)

# Writes multipart images into <public>/<uploads> and removes them again
# when the listing they belong to is rejected.

class StoredUpload(NamedTuple):
    path: Path
    url: str

def ensure_upload_dir(public_dir: str, uploads_subdir: str) -> Path:
    uploads = Path(public_dir) / uploads_subdir
    uploads.mkdir(parents=True, exist_ok=True)
    return uploads

def generate_filename(original: Optional[str]) -> str:
    ext = Path(original or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"

def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)

def save_upload(upload: UploadFile, uploads_dir: Path, public_dir: Path) -> StoredUpload:
    """Blocking write, callers on the event loop go through run_in_threadpool."""
    filename = generate_filename(upload.filename)
    path = uploads_dir / filename
    out = path.open("xb")
    try:
        with out:
            shutil.copyfileobj(upload.file, out)
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    stored = StoredUpload(path=path, url="/" + path.relative_to(public_dir).as_posix())
    logger.info("stored upload %s (%s)", filename, upload.filename)
    return stored

def discard_upload(stored: StoredUpload) -> None:
    try:
        stored.path.unlink()
        logger.info("removed upload %s", stored.path.name)
    except FileNotFoundError:
        logger.warning("upload %s already gone", stored.path.name)

@asynccontextmanager
async def staged_upload(
    upload: Optional[UploadFile], uploads_dir: Path, public_dir: Path
) -> AsyncIterator[Optional[StoredUpload]]:
    """
    Persist `upload` (if any) for the duration of the block.

    Yields the StoredUpload, or None when the request carried no file. The
    write runs in the threadpool so other requests keep being served. If the
    block raises, the file is deleted before the exception propagates; on a
    clean exit it stays where it is.
    """
    stored = None
    if has_file(upload):
        stored = await run_in_threadpool(save_upload, upload, uploads_dir, public_dir)
    try:
        yield stored
    except BaseException:
        if stored is not None:
            discard_upload(stored)
        raise

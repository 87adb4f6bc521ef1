import logging
import time
from pathlib import Path

from werkzeug.utils import secure_filename

from recruitment.config import settings

logger = logging.getLogger(__name__)


class UploadRejected(Exception):
    """Upload refused before anything was written. Carries the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def allowed_extensions() -> set[str]:
    return {e.strip().lower() for e in settings.allowed_upload_extensions.split(",") if e.strip()}


def validate_upload(content: bytes, original_name: str | None) -> str:
    """Check size and extension. Returns the sanitized file name."""
    if not original_name:
        raise UploadRejected("File name is required")
    if not content:
        raise UploadRejected("Uploaded file is empty")
    max_bytes = settings.max_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise UploadRejected(f"File too large. Max allowed is {settings.max_upload_mb}MB.", status_code=413)
    ext = Path(original_name).suffix.lower()
    if ext not in allowed_extensions():
        raise UploadRejected(f"Unsupported file type '{ext or original_name}'")
    safe = secure_filename(original_name)
    return safe or f"file{ext}"


def save_upload(content: bytes, original_name: str | None, subdir: str, label: str | None = None) -> tuple[str, str]:
    """
    Write an upload to <upload_dir>/<subdir>/<timestamp>[-<label>]-<name>.
    Returns (public_url, original_name).
    """
    safe = validate_upload(content, original_name)
    stamp = int(time.time() * 1000)
    stored_name = f"{stamp}-{label}-{safe}" if label else f"{stamp}-{safe}"
    target_dir = Path(settings.upload_dir) / subdir
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / stored_name).write_bytes(content)
    url = f"{settings.upload_url_prefix.rstrip('/')}/{subdir.strip('/')}/{stored_name}"
    logger.info("Stored upload %s (%d bytes)", url, len(content))
    return url, original_name


def path_for_url(url: str) -> Path | None:
    prefix = settings.upload_url_prefix.rstrip("/") + "/"
    if not url.startswith(prefix):
        return None
    return Path(settings.upload_dir) / url[len(prefix):]


def discard_upload(url: str) -> None:
    """Remove a stored file after the database write that referenced it failed."""
    path = path_for_url(url)
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove orphaned upload %s: %s", path, e)

"""Upload gate applied by callers before a file enters the pipeline.

The extraction pipeline itself accepts any buffer and always returns a
result. Rejecting the wrong file type or an oversized file is the job of the
layer that receives the upload, which calls ``validate_upload`` first.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from resume_extract.config.settings import ExtractionSettings

logger = logging.getLogger(__name__)


class UploadRejected(ValueError):
    """The upload is not something the pipeline should be given."""


def validate_upload(
    data: bytes,
    filename: str,
    settings: ExtractionSettings,
) -> None:
    """Check an upload's extension and size.

    Args:
        data: Raw bytes of the upload.
        filename: Declared filename of the upload.
        settings: Extraction settings with the size limit and extensions.

    Raises:
        UploadRejected: If the extension is not allowed, or the buffer is
            empty or larger than ``max_upload_bytes``.
    """
    suffix = PurePath(filename).suffix.lower()
    allowed = {ext.lower() for ext in settings.allowed_extensions}
    if suffix not in allowed:
        raise UploadRejected(
            f"Unsupported file type {suffix or '(none)'!r}; "
            f"expected one of {', '.join(sorted(allowed))}"
        )

    if not data:
        raise UploadRejected("File is empty")

    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes / (1024 * 1024)
        raise UploadRejected(f"File size must be less than {limit_mb:g}MB")

    logger.debug("Upload accepted: %s (%d bytes)", filename, len(data))

"""Build message attachments from local files."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from template_mailer.domain.models import Attachment


def attachment_from_path(path: Path, *, disposition: str = "attachment") -> Attachment:
    """Read a file and return it as a base64-encoded attachment.

    Raises:
        FileNotFoundError: The file does not exist.
    """
    mime_type, _encoding = mimetypes.guess_type(path.name)
    content = base64.b64encode(path.read_bytes()).decode("ascii")
    return Attachment(content=content, filename=path.name, mime_type=mime_type, disposition=disposition)


__all__ = ["attachment_from_path"]

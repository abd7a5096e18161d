"""Hand a finished document to the host, inline or through a file on disk."""

from __future__ import annotations

import enum
from pathlib import Path

from mdpanel.config import RENDER_FILE_NAME
from mdpanel.host import DisplayHost


class RenderMode(enum.Enum):
    """How a document reaches the host: as text or through a file."""

    INLINE = "inline"
    FILE = "file"

    @classmethod
    def for_images(cls, enable_images: bool) -> RenderMode:
        """File-backed when images must resolve, inline otherwise."""
        return cls.FILE if enable_images else cls.INLINE


def render_file_path(working_directory: str | Path) -> Path:
    """Location of the rendered document; an empty directory means the cwd."""
    return Path(working_directory or ".") / RENDER_FILE_NAME


def deliver_inline(host: DisplayHost, document: str) -> None:
    """Assign the document text as the host source."""
    host.set_document_source(document)


def deliver_file(host: DisplayHost, document: str, working_directory: str | Path) -> Path:
    """Write the document next to its images and point the host at it.

    The source is cleared and the host flushed first; reassigning an
    unchanged path would otherwise not reload. Write errors propagate.
    """
    path = render_file_path(working_directory)
    path.write_text(document, encoding="utf-8")
    host.set_document_source("")
    host.flush()
    host.set_document_source(path)
    return path


def deliver(host: DisplayHost, document: str, enable_images: bool, working_directory: str | Path) -> RenderMode:
    """Deliver the document in the mode chosen by `enable_images` and return that mode."""
    mode = RenderMode.for_images(enable_images)
    if mode is RenderMode.FILE:
        deliver_file(host, document, working_directory)
    else:
        deliver_inline(host, document)
    return mode

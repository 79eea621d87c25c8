"""Persistence helpers for pdftickle."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .config import WriterSettings
from .document import Document
from .errors import InvalidArgumentError
from .pdf_writer import build_pdf

logger = logging.getLogger(__name__)

Target = Union[str, "os.PathLike[str]", BinaryIO]


def save_pdf(document: Document, target: Target, settings: Optional[WriterSettings] = None) -> None:
    """Serialize *document* and write it to a path or a writable binary stream.

    The PDF is fully built in memory first; ``OSError`` from the write
    propagates unchanged.
    """

    if target is None:
        raise InvalidArgumentError("A file path or stream is required")
    if isinstance(target, (str, os.PathLike)):
        path = Path(target)
        pdf_bytes = build_pdf(document, settings)
        path.write_bytes(pdf_bytes)
        logger.debug("Wrote %d bytes to %s", len(pdf_bytes), path)
        return
    if not hasattr(target, "write"):
        raise InvalidArgumentError(f"Cannot write a PDF to {type(target).__name__}")
    pdf_bytes = build_pdf(document, settings)
    target.write(pdf_bytes)
    logger.debug("Wrote %d bytes to stream", len(pdf_bytes))


__all__ = ["save_pdf"]

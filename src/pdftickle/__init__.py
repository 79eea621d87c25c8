"""Minimal PDF writer: build pages of positioned text and serialize them."""

import logging
from typing import Optional

from .config import WriterSettings, load_settings
from .document import Document, Metadata, Page, TextFragment
from .errors import DocumentClosedError, InvalidArgumentError, PDFTickleError
from .page_size import A3, A4, A5, LEGAL, LETTER, STANDARD_SIZES, TABLOID, PageSize
from .pdf_writer import build_pdf
from .storage import save_pdf

from .version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())


def create_document(title: Optional[str] = None, author: Optional[str] = None) -> Document:
    return Document(title=title, author=author)


__all__ = [
    "A3",
    "A4",
    "A5",
    "Document",
    "DocumentClosedError",
    "InvalidArgumentError",
    "LEGAL",
    "LETTER",
    "Metadata",
    "PDFTickleError",
    "Page",
    "PageSize",
    "STANDARD_SIZES",
    "TABLOID",
    "TextFragment",
    "WriterSettings",
    "build_pdf",
    "create_document",
    "load_settings",
    "save_pdf",
]

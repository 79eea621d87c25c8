"""In-memory document model: metadata, pages and positioned text."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, BinaryIO, List, Optional, Tuple, Union

from .errors import DocumentClosedError, InvalidArgumentError
from .page_size import A4, PageSize
from .version import __version__

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .config import WriterSettings

logger = logging.getLogger(__name__)

PRODUCER = f"pdftickle {__version__}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Metadata:
    title: Optional[str] = None
    author: Optional[str] = None
    producer: str = PRODUCER
    creation_date: datetime = field(default_factory=_utcnow)
    modification_date: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.modification_date is None:
            self.modification_date = self.creation_date

    def update_modification_date(self) -> None:
        self.modification_date = _utcnow()


@dataclass(frozen=True)
class TextFragment:
    text: str
    x: float
    y: float


class Page:
    """A single page holding text fragments in insertion order.

    Pages are created through :meth:`Document.add_page`, which assigns the
    page number and the owning document.
    """

    def __init__(self, page_size: PageSize):
        if not isinstance(page_size, PageSize):
            raise InvalidArgumentError(f"Expected a PageSize, got {page_size!r}")
        self._page_size = page_size
        self._page_number = 0
        self._document: Optional["Document"] = None
        self._fragments: List[TextFragment] = []

    @property
    def page_size(self) -> PageSize:
        return self._page_size

    @property
    def page_number(self) -> int:
        return self._page_number

    @property
    def document(self) -> Optional["Document"]:
        return self._document

    @property
    def fragments(self) -> Tuple[TextFragment, ...]:
        return tuple(self._fragments)

    @property
    def width(self) -> float:
        return self._page_size.width

    @property
    def height(self) -> float:
        return self._page_size.height

    def add_text(self, text: str, x: float, y: float) -> TextFragment:
        """Place *text* at (*x*, *y*), measured in points from the bottom-left corner."""

        if text is None:
            raise InvalidArgumentError("Text is required")
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Text must be a string, got {type(text).__name__}")
        try:
            fragment = TextFragment(text=text, x=float(x), y=float(y))
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid text position ({x!r}, {y!r})") from exc
        if not (math.isfinite(fragment.x) and math.isfinite(fragment.y)):
            raise InvalidArgumentError(f"Text position must be finite, got ({x!r}, {y!r})")
        self._fragments.append(fragment)
        return fragment

    def _attach(self, document: "Document", page_number: int) -> None:
        self._document = document
        self._page_number = page_number

    def __str__(self) -> str:
        return f"Page {self._page_number} ({self._page_size.name}) - {len(self._fragments)} content elements"

    def __repr__(self) -> str:
        return f"Page(number={self._page_number}, size={self._page_size.name!r}, fragments={len(self._fragments)})"


class Document:
    """Ordered collection of pages plus document metadata."""

    def __init__(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        default_page_size: PageSize = A4,
    ):
        self.metadata = Metadata(title=title, author=author)
        self._pages: List[Page] = []
        self._closed = False
        self.default_page_size = default_page_size

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def default_page_size(self) -> PageSize:
        return self._default_page_size

    @default_page_size.setter
    def default_page_size(self, value: PageSize) -> None:
        if not isinstance(value, PageSize):
            raise InvalidArgumentError(f"Expected a PageSize, got {value!r}")
        self._default_page_size = value

    # ------------------------------------------------------------------
    # Page management
    # ------------------------------------------------------------------
    def add_page(self, page_size: Optional[PageSize] = None) -> Page:
        self._ensure_open()
        page = Page(self._default_page_size if page_size is None else page_size)
        page._attach(self, len(self._pages) + 1)
        self._pages.append(page)
        self.metadata.update_modification_date()
        logger.debug("Added page %d (%s)", page.page_number, page.page_size)
        return page

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(
        self,
        target: Union[str, "os.PathLike[str]", BinaryIO],
        settings: Optional["WriterSettings"] = None,
    ) -> None:
        """Write the document to a file path or a writable binary stream."""

        self._ensure_open()
        if target is None:
            raise InvalidArgumentError("A file path or stream is required")
        from .storage import save_pdf

        self.metadata.update_modification_date()
        save_pdf(self, target, settings)

    def to_bytes(self, settings: Optional["WriterSettings"] = None) -> bytes:
        self._ensure_open()
        from .pdf_writer import build_pdf

        self.metadata.update_modification_date()
        return build_pdf(self, settings)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        if not self._closed:
            self._pages.clear()
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise DocumentClosedError("Document is closed")

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __str__(self) -> str:
        return f"PDF Document - {self.page_count} pages"


__all__ = ["Document", "Metadata", "Page", "PRODUCER", "TextFragment"]

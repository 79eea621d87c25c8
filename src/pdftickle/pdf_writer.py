"""PDF serialization for :class:`~pdftickle.document.Document`."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import List, Optional, Sequence

from .config import WriterSettings
from .document import Document, Metadata, Page, TextFragment

logger = logging.getLogger(__name__)

BINARY_MARKER = b"%\xE2\xE3\xCF\xD3\n"

PAGES_OBJ = 2

_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        "(": "\\(",
        ")": "\\)",
        "\r": "\\r",
        "\n": "\\n",
        "\t": "\\t",
    }
)


class _ObjectTable:
    """Object numbers and bodies for one serialization pass."""

    def __init__(self) -> None:
        self.bodies: List[Optional[bytes]] = []

    def add(self, body: Optional[bytes | str]) -> int:
        self.bodies.append(_to_bytes(body) if body is not None else None)
        return len(self.bodies)

    def set(self, obj_num: int, body: bytes | str) -> None:
        self.bodies[obj_num - 1] = _to_bytes(body)

    def write_objects(self, buffer: BytesIO) -> List[int]:
        """Append every object to *buffer*, returning the offset of each `N 0 obj` line."""

        offsets: List[int] = []
        for number, body in enumerate(self.bodies, start=1):
            if body is None:
                raise RuntimeError(f"PDF object {number} was left undefined")
            offsets.append(buffer.tell())
            buffer.write(b"%d 0 obj\n%s\nendobj\n" % (number, body))
        return offsets


def build_pdf(document: Document, settings: Optional[WriterSettings] = None) -> bytes:
    """Serialize *document* to a minimal but standards-compliant PDF."""

    if settings is None:
        settings = WriterSettings()
    table = _ObjectTable()

    catalog_obj = table.add(f"<<\n/Type /Catalog\n/Pages {PAGES_OBJ} 0 R\n>>")
    # Reserve place for the /Pages node; its kids are only known after the loop.
    pages_obj = table.add(None)

    resources = _build_resources(settings)
    page_object_numbers: List[int] = []
    for page in document.pages:
        content_obj = table.add(_stream(_build_content_stream(page.fragments, settings)))
        page_obj = table.add(_build_page_object(page, pages_obj, content_obj, resources))
        page_object_numbers.append(page_obj)

    table.set(pages_obj, _build_pages_object(page_object_numbers))

    info_obj = None
    if settings.include_info:
        info_obj = table.add(_build_info_object(document.metadata))

    buffer = BytesIO()
    buffer.write(f"%PDF-{settings.pdf_version}\n".encode("latin-1"))
    buffer.write(BINARY_MARKER)
    offsets = table.write_objects(buffer)
    xref_offset = buffer.tell()
    buffer.write(_build_xref(offsets))
    buffer.write(_build_trailer(len(offsets) + 1, catalog_obj, info_obj, xref_offset))
    data = buffer.getvalue()
    logger.debug(
        "Serialized %d pages into %d objects (%d bytes)",
        len(page_object_numbers),
        len(table.bodies),
        len(data),
    )
    return data


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def escape_text(text: str) -> str:
    """Escape *text* for use inside a PDF literal string."""

    return text.translate(_ESCAPES)


def format_number(value: float) -> str:
    text = f"{value:.2f}"
    return "0.00" if text == "-0.00" else text


def _format_font_size(value: float) -> str:
    # PDF numbers have no exponent form.
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _to_bytes(body: bytes | str) -> bytes:
    return body if isinstance(body, bytes) else body.encode("latin-1", errors="replace")


def _build_resources(settings: WriterSettings) -> str:
    return (
        "<<\n"
        "  /Font <<\n"
        f"    /{settings.font_resource} << /Type /Font /Subtype /Type1 /BaseFont /{settings.base_font} >>\n"
        "  >>\n"
        ">>"
    )


def _build_content_stream(fragments: Sequence[TextFragment], settings: WriterSettings) -> bytes:
    lines: List[str] = [
        "BT",
        f"/{settings.font_resource} {_format_font_size(settings.font_size)} Tf",
    ]
    for fragment in fragments:
        # Td is relative to the current point, so undo each move to keep positions absolute.
        lines.append(f"{format_number(fragment.x)} {format_number(fragment.y)} Td")
        lines.append(f"({escape_text(fragment.text)}) Tj")
        lines.append(f"{format_number(-fragment.x)} {format_number(-fragment.y)} Td")
    lines.append("ET")
    return ("\n".join(lines) + "\n").encode("latin-1", errors="replace")


def _build_page_object(page: Page, pages_obj: int, content_obj: int, resources: str) -> str:
    mediabox = f"[0 0 {page.width:.2f} {page.height:.2f}]"
    return (
        "<<\n"
        "/Type /Page\n"
        f"/Parent {pages_obj} 0 R\n"
        f"/MediaBox {mediabox}\n"
        f"/Contents {content_obj} 0 R\n"
        f"/Resources {resources}\n"
        ">>"
    )


def _build_pages_object(page_object_numbers: List[int]) -> str:
    kids = " ".join(f"{num} 0 R" for num in page_object_numbers)
    return f"<<\n/Type /Pages\n/Kids [{kids}]\n/Count {len(page_object_numbers)}\n>>"


def _build_info_object(metadata: Metadata) -> str:
    entries = []
    if metadata.title is not None:
        entries.append(f"/Title ({escape_text(metadata.title)})")
    if metadata.author is not None:
        entries.append(f"/Author ({escape_text(metadata.author)})")
    entries.append(f"/Producer ({escape_text(metadata.producer)})")
    entries.append(f"/CreationDate ({format_date(metadata.creation_date)})")
    entries.append(f"/ModDate ({format_date(metadata.modification_date)})")
    return "<<\n" + "\n".join(entries) + "\n>>"


def format_date(value: datetime) -> str:
    """Render *value* as a PDF date string in UTC, e.g. ``D:20240131120000Z``."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("D:%Y%m%d%H%M%SZ")


def _stream(content: bytes) -> bytes:
    return f"<<\n/Length {len(content)}\n>>\nstream\n".encode("latin-1") + content + b"endstream"


def _build_xref(offsets: List[int]) -> bytes:
    entries = ["xref", f"0 {len(offsets) + 1}", "0000000000 65535 f "]
    entries.extend(f"{offset:010d} 00000 n " for offset in offsets)
    return ("\n".join(entries) + "\n").encode("latin-1")


def _build_trailer(size: int, catalog_obj: int, info_obj: Optional[int], xref_offset: int) -> bytes:
    lines = ["trailer", "<<", f"/Size {size}", f"/Root {catalog_obj} 0 R"]
    if info_obj is not None:
        lines.append(f"/Info {info_obj} 0 R")
    lines.extend([">>", "startxref", str(xref_offset), "%%EOF"])
    return ("\n".join(lines) + "\n").encode("latin-1")


__all__ = ["build_pdf", "escape_text", "format_date", "format_number"]

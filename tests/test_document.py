from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pdftickle import (
    A4,
    A5,
    LETTER,
    Document,
    DocumentClosedError,
    InvalidArgumentError,
    PageSize,
    TextFragment,
    create_document,
)
from pdftickle import __version__
from pdftickle.document import PRODUCER

OLD = datetime(2000, 1, 1, tzinfo=timezone.utc)


def test_create_document_sets_metadata() -> None:
    document = create_document("Report", "Jane Doe")
    assert document.metadata.title == "Report"
    assert document.metadata.author == "Jane Doe"
    assert document.metadata.producer == PRODUCER
    assert PRODUCER == f"pdftickle {__version__}"
    assert document.metadata.creation_date == document.metadata.modification_date
    assert document.metadata.creation_date.tzinfo is not None
    assert document.default_page_size == A4
    assert document.page_count == 0


def test_pages_are_numbered_in_insertion_order() -> None:
    document = Document()
    first = document.add_page(A4)
    second = document.add_page(LETTER)
    third = document.add_page(PageSize.custom(400, 600).rotate())
    assert [page.page_number for page in document.pages] == [1, 2, 3]
    assert document.pages == (first, second, third)
    assert document.page_count == 3
    assert all(page.document is document for page in document.pages)


def test_add_page_uses_default_size() -> None:
    document = Document(default_page_size=A5)
    assert document.add_page().page_size is A5
    document.default_page_size = LETTER
    assert document.add_page().page_size is LETTER


def test_default_page_size_must_be_a_page_size() -> None:
    document = Document()
    with pytest.raises(InvalidArgumentError):
        document.default_page_size = None  # type: ignore[assignment]
    with pytest.raises(InvalidArgumentError):
        document.add_page("A4")  # type: ignore[arg-type]


def test_pages_view_is_read_only() -> None:
    document = Document()
    document.add_page()
    with pytest.raises(AttributeError):
        document.pages.append(document.pages[0])  # type: ignore[attr-defined]
    with pytest.raises(AttributeError):
        document.pages[0].page_number = 7  # type: ignore[misc]


def test_add_page_refreshes_modification_date() -> None:
    document = Document()
    document.metadata.modification_date = OLD
    document.add_page()
    assert document.metadata.modification_date > OLD
    assert document.metadata.creation_date > OLD


def test_to_bytes_refreshes_modification_date_only() -> None:
    document = Document(title="T")
    page = document.add_page()
    page.add_text("Hi", 10, 20)
    document.metadata.modification_date = OLD
    document.to_bytes()
    assert document.metadata.modification_date > OLD
    assert document.metadata.title == "T"
    assert page.fragments == (TextFragment("Hi", 10.0, 20.0),)


def test_add_text_appends_fragments() -> None:
    page = Document().add_page()
    page.add_text("one", 1, 2)
    fragment = page.add_text("two", 3.5, -4)
    assert fragment == TextFragment("two", 3.5, -4.0)
    assert [item.text for item in page.fragments] == ["one", "two"]
    assert isinstance(page.fragments[0].x, float)


def test_add_text_allows_out_of_bounds_positions() -> None:
    page = Document().add_page(A4)
    page.add_text("far away", 5000, -300)
    assert page.fragments[0].x == pytest.approx(5000)


def test_add_text_rejects_missing_text() -> None:
    page = Document().add_page()
    with pytest.raises(InvalidArgumentError):
        page.add_text(None, 0, 0)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        page.add_text(42, 0, 0)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        page.add_text("x", "left", 0)  # type: ignore[arg-type]
    assert page.fragments == ()


@pytest.mark.parametrize("x, y", [(float("nan"), 0), (0, float("inf")), (float("-inf"), float("nan"))])
def test_add_text_rejects_non_finite_positions(x: float, y: float) -> None:
    page = Document().add_page()
    with pytest.raises(InvalidArgumentError):
        page.add_text("x", x, y)
    assert page.fragments == ()


def test_closed_document_rejects_operations(tmp_path) -> None:
    document = Document()
    document.add_page()
    document.close()
    assert document.closed
    assert document.page_count == 0
    with pytest.raises(DocumentClosedError):
        document.add_page()
    with pytest.raises(DocumentClosedError):
        document.to_bytes()
    with pytest.raises(DocumentClosedError):
        document.save(tmp_path / "closed.pdf")
    document.close()


def test_context_manager_closes() -> None:
    with Document() as document:
        document.add_page()
    assert document.closed
    with pytest.raises(DocumentClosedError):
        document.add_page()


def test_string_forms() -> None:
    document = Document()
    page = document.add_page(LETTER)
    page.add_text("a", 0, 0)
    page.add_text("b", 0, 0)
    assert str(page) == "Page 1 (Letter) - 2 content elements"
    assert str(document) == "PDF Document - 1 pages"

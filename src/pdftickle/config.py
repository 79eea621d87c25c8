"""Writer settings loaded from ``PDFTICKLE_*`` environment variables."""

from __future__ import annotations

import math
import re
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# The fourteen fonts every conforming reader ships; nothing else can be used without embedding.
STANDARD_FONTS = frozenset(
    {
        "Courier",
        "Courier-Bold",
        "Courier-BoldOblique",
        "Courier-Oblique",
        "Helvetica",
        "Helvetica-Bold",
        "Helvetica-BoldOblique",
        "Helvetica-Oblique",
        "Symbol",
        "Times-Bold",
        "Times-BoldItalic",
        "Times-Italic",
        "Times-Roman",
        "ZapfDingbats",
    }
)

_VERSION_RE = re.compile(r"^1\.[0-7]$")
_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")


class WriterSettings(BaseSettings):
    """Options controlling how documents are serialised."""

    pdf_version: str = "1.4"
    font_resource: str = "F1"
    base_font: str = "Helvetica"
    font_size: float = 12.0
    include_info: bool = False

    model_config = SettingsConfigDict(env_prefix="PDFTICKLE_", extra="forbid", frozen=True)

    @field_validator("pdf_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        if not _VERSION_RE.match(value):
            raise ValueError(f"unsupported PDF version {value!r}")
        return value

    @field_validator("font_resource")
    @classmethod
    def _check_resource(cls, value: str) -> str:
        if not _NAME_RE.match(value):
            raise ValueError(f"font resource must be alphanumeric, got {value!r}")
        return value

    @field_validator("base_font")
    @classmethod
    def _check_font(cls, value: str) -> str:
        if value not in STANDARD_FONTS:
            raise ValueError(f"{value!r} is not one of the standard PDF fonts")
        return value

    @field_validator("font_size")
    @classmethod
    def _check_size(cls, value: float) -> float:
        if not math.isfinite(value) or round(value, 4) <= 0:
            raise ValueError("font size must be a finite number of at least 0.0001")
        return value


def load_settings(**overrides: Any) -> WriterSettings:
    """Build settings from the environment with keyword overrides applied on top."""

    return WriterSettings(**overrides)


__all__ = ["STANDARD_FONTS", "WriterSettings", "load_settings"]

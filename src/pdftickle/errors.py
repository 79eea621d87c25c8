"""Typed exceptions raised by the pdftickle document model and writer."""


class PDFTickleError(Exception):
    """Base class for pdftickle errors."""


class InvalidArgumentError(PDFTickleError, ValueError):
    """Raised when a required value is missing or unusable."""


class DocumentClosedError(PDFTickleError, RuntimeError):
    """Raised when an operation is attempted on a closed document."""


__all__ = ["PDFTickleError", "InvalidArgumentError", "DocumentClosedError"]

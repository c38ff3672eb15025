"""Errors raised while loading the source record sets."""
from __future__ import annotations


class LoadFailure(RuntimeError):
    """Raised when an input resource cannot be fetched or read as tabular data."""


class MalformedInputError(LoadFailure):
    """Raised when a row set cannot be interpreted as a table of named columns."""

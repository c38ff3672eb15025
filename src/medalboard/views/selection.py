"""Shared country filter driven by chart clicks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionSnapshot:
    """Immutable copy of the selection handed to derived views."""

    active_country: Optional[str] = None

    @property
    def is_filtered(self) -> bool:
        return self.active_country is not None

    @property
    def state(self) -> str:
        return f"FilteredBy({self.active_country})" if self.is_filtered else "Unfiltered"


class SelectionState:
    """Holds at most one active country.

    ``toggle`` is the only way to pick a country: toggling the active one
    clears it, toggling any other replaces it.
    """

    def __init__(self) -> None:
        self._active_country: Optional[str] = None

    @property
    def active_country(self) -> Optional[str]:
        return self._active_country

    def toggle(self, code: str) -> Optional[str]:
        previous = self._active_country
        self._active_country = None if previous == code else code
        log.debug("Selection toggled by %s: %s -> %s", code, previous, self._active_country)
        return self._active_country

    def clear(self) -> None:
        if self._active_country is not None:
            log.debug("Selection cleared (was %s)", self._active_country)
        self._active_country = None

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(active_country=self._active_country)

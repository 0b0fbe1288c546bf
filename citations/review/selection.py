"""Which citation is on screen, plus the display-only edits made to it."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterator, List, Optional, Sequence, Tuple

from citations.core.models import CitationRecord, ProcessingOutcome, Success
from citations.processing.formatting import default_date_line

EDITABLE_FIELDS = ("oficio_text", "process_text", "date_line")


@dataclass(frozen=True)
class DisplayFields:
    """Header texts printed on the citation; never written back to the record."""

    oficio_text: str
    process_text: str
    date_line: str


def derived_display_fields(
    citation: CitationRecord, year: int, today: date | None = None
) -> DisplayFields:
    return DisplayFields(
        oficio_text=f"{citation.oficio_number}/{year}" if citation.oficio_number else "",
        process_text=f"{citation.process_number}/{year}" if citation.process_number else "",
        date_line=default_date_line(today),
    )


class ViewEdits:
    """Holds clerk edits for the citation currently shown.

    Edits are keyed by the record's oficio and process numbers and the
    hearing year; when any of those change the edits fall back to the
    derived defaults.
    """

    def __init__(self, today: date | None = None) -> None:
        self.today = today
        self._key: Optional[Tuple[str, str, int]] = None
        self._fields: Optional[DisplayFields] = None

    def fields_for(self, citation: CitationRecord, year: int) -> DisplayFields:
        key = (citation.oficio_number, citation.process_number, year)
        if key != self._key or self._fields is None:
            self._key = key
            self._fields = derived_display_fields(citation, year, self.today)
        return self._fields

    def edit(self, citation: CitationRecord, year: int, **updates: str) -> DisplayFields:
        """Apply text edits to the current citation's header fields."""

        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        current = self.fields_for(citation, year)
        self._fields = replace(current, **{k: v for k, v in updates.items() if v is not None})
        return self._fields

    def clear(self) -> None:
        self._key = None
        self._fields = None

    def snapshot(self) -> Tuple[Optional[Tuple[str, str, int]], Optional[DisplayFields]]:
        return self._key, self._fields

    def restore(self, snapshot: Tuple[Optional[Tuple[str, str, int]], Optional[DisplayFields]]) -> None:
        self._key, self._fields = snapshot


class SelectionState:
    """The outcome list of the current run and the index shown in the detail view."""

    def __init__(self, outcomes: Sequence[ProcessingOutcome] = (), today: date | None = None) -> None:
        self.outcomes: List[ProcessingOutcome] = list(outcomes)
        self.selected_index: Optional[int] = None
        self.edits = ViewEdits(today=today)

    def replace(self, outcomes: Sequence[ProcessingOutcome]) -> None:
        """Swap in a new record set and drop the selection."""

        self.outcomes = list(outcomes)
        self.selected_index = None
        self.edits.clear()

    def reset(self) -> None:
        self.replace([])

    def select(self, index: Optional[int]) -> Optional[CitationRecord]:
        self.selected_index = index
        return self.current

    @property
    def current(self) -> Optional[CitationRecord]:
        """The selected citation, or ``None`` for no selection or a failed outcome."""

        index = self.selected_index
        if index is None or not 0 <= index < len(self.outcomes):
            return None
        outcome = self.outcomes[index]
        return outcome.citation if isinstance(outcome, Success) else None

    def success_indexes(self) -> List[int]:
        return [index for index, outcome in enumerate(self.outcomes) if isinstance(outcome, Success)]

    @contextmanager
    def preserved(self) -> Iterator["SelectionState"]:
        """Restore the outcome list, selection, and header edits on exit, even after an error."""

        saved_outcomes = self.outcomes
        saved_index = self.selected_index
        saved_edits = self.edits.snapshot()
        try:
            yield self
        finally:
            self.outcomes = saved_outcomes
            self.selected_index = saved_index
            self.edits.restore(saved_edits)

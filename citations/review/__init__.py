"""Selection state and session workflow used by the dashboard."""
from citations.review.selection import (
    DisplayFields,
    SelectionState,
    ViewEdits,
    derived_display_fields,
)
from citations.review.workflow import RunResult, generate_citations, refresh_correspondence

__all__ = [
    "DisplayFields",
    "RunResult",
    "SelectionState",
    "ViewEdits",
    "derived_display_fields",
    "generate_citations",
    "refresh_correspondence",
]

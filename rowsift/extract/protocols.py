"""Protocol definitions for the collaborators around the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, Sequence, runtime_checkable

from rowsift.extract.types import GroupedResult, MediaCategory, SourceRow, TableHints

if TYPE_CHECKING:
    from rowsift.extract.classifiers import Classification


class RowSource(Protocol):
    """Ordered rows of one listing table plus the hints used to classify it."""

    hints: TableHints

    def rows(self) -> Sequence[SourceRow]:
        ...


class Sink(Protocol):
    """Receives one complete result per extraction pass."""

    def receive(self, result: GroupedResult) -> None:
        ...


@runtime_checkable
class CategoryClassifier(Protocol):
    """Turns descriptor tokens into the field set of one media category."""

    category: MediaCategory

    def classify(self, tokens: List[str]) -> Classification:
        ...

"""Rebuild group / section / release nesting from a flat row sequence."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional

from rowsift import logger
from rowsift.extract.types import (
    Group,
    GroupedEntry,
    GroupedResult,
    MediaCategory,
    ParsedRecord,
    Section,
    SectionNode,
    SourceRow,
)

SECTION_TAG = "edition_info"
GROUP_TAG = "group"
LEAF_TAGS = ("group_torrent", "torrent")


class RowKind(Enum):
    HEADER_CONTINUATION = auto()
    GROUP_HEADER = auto()
    LEAF = auto()
    OTHER = auto()


def row_kind(row: SourceRow) -> RowKind:
    if row.has_tag(SECTION_TAG):
        return RowKind.HEADER_CONTINUATION
    if row.has_tag(GROUP_TAG):
        return RowKind.GROUP_HEADER
    if any(row.has_tag(tag) for tag in LEAF_TAGS):
        return RowKind.LEAF
    return RowKind.OTHER


LeafParser = Callable[[SourceRow], Optional[ParsedRecord]]


class HierarchyBuilder:
    """
    State machine over the rows of one table.

    Consecutive section-header rows collect as pending titles and become one
    ``Section`` (titles joined with newlines) at the next non-section row.
    A group header closes whatever is open and starts a ``Group``. Leaves
    attach to the open node. Whatever is still pending or open at the end
    is flushed as the last entry.
    """

    def __init__(self, category: MediaCategory, parse_leaf: LeafParser):
        self.category = category
        self.parse_leaf = parse_leaf

    def build(self, rows: Iterable[SourceRow]) -> GroupedResult:
        entries: List[GroupedEntry] = []
        current: Optional[SectionNode] = None
        current_group_id: Optional[str] = None
        records: List[ParsedRecord] = []
        pending_titles: List[str] = []

        def close_open_entry() -> None:
            if current is not None or records:
                entries.append(GroupedEntry(section=current, records=tuple(records)))

        for row in rows:
            kind = row_kind(row)

            if kind is RowKind.HEADER_CONTINUATION:
                title = row.title.strip()
                if title:
                    pending_titles.append(title)
                    logger.debug(f"Found section header: {title}")
                continue

            if pending_titles:
                close_open_entry()
                merged = "\n".join(pending_titles).strip()
                current = Section(id=f"section_{len(entries)}", title=merged, group_id=current_group_id)
                records = []
                pending_titles = []
                logger.debug(f"Created merged section header: {merged!r}")

            if kind is RowKind.GROUP_HEADER:
                close_open_entry()
                current = Group(id=f"group_{len(entries)}", title=row.title.strip(), raw_html=row.header_html)
                current_group_id = current.id
                records = []
                logger.debug(f"Found group header: {current.title}")
            elif kind is RowKind.LEAF:
                record = self.parse_leaf(row)
                if record is not None:
                    records.append(self._attach(record, current))

        if pending_titles:
            close_open_entry()
            merged = "\n".join(pending_titles).strip()
            current = Section(id=f"section_{len(entries)}", title=merged, group_id=current_group_id)
            records = []
            logger.debug(f"Created final merged section header: {merged!r}")

        close_open_entry()
        return GroupedResult(category=self.category, entries=tuple(entries))

    def _attach(self, record: ParsedRecord, node: Optional[SectionNode]) -> ParsedRecord:
        if node is None:
            return record
        changes = {"section_id": node.id, "section_title": node.title}
        # Printed media sections name the published work, which doubles as its group.
        if self.category is MediaCategory.PRINTED_MEDIA and isinstance(node, Section):
            changes["group"] = node.title
        return replace(record, **changes)

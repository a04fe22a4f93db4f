"""One extraction pass: rows in, grouped (and optionally sorted) records out."""

from __future__ import annotations

from typing import Iterable, List, Optional

from rowsift import logger, table_type
from rowsift.extract.classifiers import build_classifiers
from rowsift.extract.hierarchy import HierarchyBuilder
from rowsift.extract.protocols import RowSource, Sink
from rowsift.extract.row_parser import RowParser
from rowsift.extract.sorting import SortDirection, sort_grouped
from rowsift.extract.types import GroupedResult, MediaCategory, ParsedRecord, SourceRow, TableHints
from rowsift.extract.vocabulary import Vocabularies


def extract(
    rows: Iterable[SourceRow],
    hints: Optional[TableHints] = None,
    *,
    category: Optional[MediaCategory] = None,
    vocabularies: Optional[Vocabularies] = None,
) -> GroupedResult:
    """
    Build the grouped result for one table.

    The category is decided once per pass (explicit ``category`` or the
    detector over ``hints``) and never revisited per row. Running this twice
    over the same rows gives equal results.
    """
    actual_category = category or table_type.detect_table_type(hints)
    classifier = build_classifiers(vocabularies)[actual_category]
    parser = RowParser(actual_category, classifier)
    result = HierarchyBuilder(actual_category, parser.try_parse).build(rows)
    logger.get_logger().pass_summary(actual_category.value, len(result.entries), len(result.records()))
    return result


def flatten(result: GroupedResult) -> List[ParsedRecord]:
    """All records in table order, ignoring the grouping."""
    return list(result.records())


def run_pass(
    source: RowSource,
    sink: Sink,
    column: Optional[str] = None,
    direction: SortDirection = "asc",
    *,
    vocabularies: Optional[Vocabularies] = None,
) -> GroupedResult:
    """Extract from ``source``, sort, and hand the finished result to ``sink`` once."""
    result = extract(source.rows(), source.hints, vocabularies=vocabularies)
    result = sort_grouped(result, column, direction)
    sink.receive(result)
    return result

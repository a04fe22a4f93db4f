"""Descriptor extraction, grouping and sorting for listing tables."""

from .classifiers import (
    GameClassifier,
    MusicClassifier,
    PrintedMediaClassifier,
    VideoClassifier,
    build_classifiers,
)
from .hierarchy import HierarchyBuilder
from .pipeline import extract, flatten, run_pass
from .row_parser import RowParser, resolve_status
from .sorting import SORT_COLUMNS, next_sort_state, sort_grouped, sort_records
from .title_splitter import TitleParts, split_title
from .tokenizer import tokenize
from .types import (
    GameFields,
    Group,
    GroupedEntry,
    GroupedResult,
    InlineMarker,
    MediaCategory,
    MusicFields,
    ParsedRecord,
    PrintedMediaFields,
    Recommendation,
    Section,
    SourceRow,
    TableHints,
    VideoFields,
)

__all__ = [
    "GameClassifier",
    "MusicClassifier",
    "PrintedMediaClassifier",
    "VideoClassifier",
    "build_classifiers",
    "HierarchyBuilder",
    "extract",
    "flatten",
    "run_pass",
    "RowParser",
    "resolve_status",
    "SORT_COLUMNS",
    "next_sort_state",
    "sort_grouped",
    "sort_records",
    "TitleParts",
    "split_title",
    "tokenize",
    "GameFields",
    "Group",
    "GroupedEntry",
    "GroupedResult",
    "InlineMarker",
    "MediaCategory",
    "MusicFields",
    "ParsedRecord",
    "PrintedMediaFields",
    "Recommendation",
    "Section",
    "SourceRow",
    "TableHints",
    "VideoFields",
]

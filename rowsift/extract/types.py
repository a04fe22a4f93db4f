"""Shared data structures for the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class MediaCategory(str, Enum):
    """Which classifier (and which record variant) applies to a table."""

    VIDEO = "video"
    PRINTED_MEDIA = "printed_media"
    GAME = "game"
    MUSIC = "music"


class Recommendation(str, Enum):
    NONE = "none"
    BEST = "best"
    ALTERNATE = "alternate"


@dataclass(frozen=True)
class InlineMarker:
    """A status badge element found inside a row (attributes and text only)."""

    classes: Tuple[str, ...] = ()
    title: str = ""
    text: str = ""

    def mentions(self, needle: str) -> bool:
        needle = needle.lower()
        haystacks = (" ".join(self.classes), self.title, self.text)
        return any(needle in value.lower() for value in haystacks)


@dataclass(frozen=True)
class TableHints:
    """Metadata supplied alongside the rows to pick a classifier."""

    identifier: Optional[str] = None
    context: Optional[MediaCategory] = None
    heading: Optional[str] = None


@dataclass(frozen=True)
class SourceRow:
    """One input row, as exposed by a row source.

    The raw blobs (``main_html``, ``header_html``, ``details_html``) are kept
    verbatim; the engine only runs substring probes over ``main_html``.
    """

    tags: FrozenSet[str] = frozenset()
    cells: Tuple[str, ...] = ()
    descriptor: str = ""
    link: Optional[str] = None
    download_link: str = ""
    element_id: str = ""
    title: str = ""
    flags: Tuple[str, ...] = ()
    markers: Tuple[InlineMarker, ...] = ()
    main_html: str = ""
    header_html: str = ""
    details_html: Optional[str] = None

    def cell_text(self, index: int) -> str:
        if 0 <= index < len(self.cells):
            return self.cells[index].strip()
        return ""

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True)
class VideoFields:
    format: str = ""
    container: str = ""
    video_codec: str = ""
    resolution: str = ""
    aspect_ratio: str = ""
    audio: str = ""
    audio_channels: str = ""
    has_dual_audio: bool = False
    region: str = ""
    subtitles: str = ""


@dataclass(frozen=True)
class PrintedMediaFields:
    printed_media_type: str = ""
    translator: str = ""
    is_digital: bool = False
    printed_format: str = ""
    is_ongoing: bool = False


@dataclass(frozen=True)
class GameFields:
    game_type: str = ""
    platform: str = ""
    game_region: str = ""
    # None: the descriptor said neither "archived" nor "unarchived"
    is_archived: Optional[bool] = None


@dataclass(frozen=True)
class MusicFields:
    music_codec: str = ""
    bitrate: str = ""
    media: str = ""
    has_log: bool = False
    has_cue: bool = False


CategoryFields = Union[VideoFields, PrintedMediaFields, GameFields, MusicFields]

FIELDS_BY_CATEGORY = {
    MediaCategory.VIDEO: VideoFields,
    MediaCategory.PRINTED_MEDIA: PrintedMediaFields,
    MediaCategory.GAME: GameFields,
    MediaCategory.MUSIC: MusicFields,
}


@dataclass(frozen=True)
class ParsedRecord:
    """One release row turned into typed fields."""

    torrent_id: str
    group_id: str
    name: str
    category: MediaCategory
    category_fields: CategoryFields
    group: str = ""
    size: str = ""
    snatches: str = ""
    seeders: str = ""
    leechers: str = ""
    flags: Tuple[str, ...] = ()
    is_freeleech: bool = False
    recommendation: Recommendation = Recommendation.NONE
    section_id: Optional[str] = None
    section_title: Optional[str] = None
    download_link: str = ""
    details_link: str = ""
    details_html: str = ""
    has_details: bool = False

    def __post_init__(self):
        expected = FIELDS_BY_CATEGORY[self.category]
        if not isinstance(self.category_fields, expected):
            raise TypeError(
                f"{self.category.value} record needs {expected.__name__}, "
                f"got {type(self.category_fields).__name__}"
            )

    @property
    def is_best(self) -> bool:
        return self.recommendation is Recommendation.BEST

    @property
    def is_alternate(self) -> bool:
        return self.recommendation is Recommendation.ALTERNATE

    def value_of(self, name: str, default=None):
        """Look up a common or category-specific field by name."""
        if hasattr(self.category_fields, name):
            return getattr(self.category_fields, name)
        if name in _COMMON_FIELDS:
            return getattr(self, name)
        return default


_COMMON_FIELDS = frozenset(
    ("torrent_id", "group_id", "name", "group", "size", "snatches", "seeders", "leechers", "flags")
)


@dataclass(frozen=True)
class Section:
    """A merged run of consecutive section-header titles."""

    id: str
    title: str
    group_id: Optional[str] = None


@dataclass(frozen=True)
class Group:
    """A group header row with its raw content kept verbatim."""

    id: str
    title: str
    raw_html: str = ""


SectionNode = Union[Section, Group]


@dataclass(frozen=True)
class GroupedEntry:
    section: Optional[SectionNode]
    records: Tuple[ParsedRecord, ...] = ()


@dataclass(frozen=True)
class GroupedResult:
    """Ordered entries of the table, in source row order."""

    category: MediaCategory
    entries: Tuple[GroupedEntry, ...] = field(default_factory=tuple)

    def records(self) -> Tuple[ParsedRecord, ...]:
        return tuple(record for entry in self.entries for record in entry.records)

    def is_empty(self) -> bool:
        return not self.entries

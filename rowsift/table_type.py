"""Decide which classifier applies to a listing table."""

from __future__ import annotations

from rowsift.extract.types import MediaCategory, TableHints

_TABLE_IDS: dict[MediaCategory, tuple[str, ...]] = {
    MediaCategory.VIDEO: ("anime_table", "live_action_table", "pv_table", "live_table"),
    MediaCategory.PRINTED_MEDIA: ("printed_media_table",),
    MediaCategory.GAME: ("games_table",),
    MediaCategory.MUSIC: (
        "album_table",
        "soundtrack_table",
        "single_table",
        "ep_table",
        "compilation_table",
        "remix_cd_table",
        "live_album_table",
        "spokenword_table",
        "image_cd_table",
        "vocal_cd_table",
    ),
}

# Checked in order; the first set with a keyword inside the heading wins.
_HEADING_KEYWORDS: tuple[tuple[MediaCategory, tuple[str, ...]], ...] = (
    (
        MediaCategory.PRINTED_MEDIA,
        ("artbook", "manga", "light novel", "oneshot", "anthology", "manhwa", "manhua"),
    ),
    (MediaCategory.GAME, ("game", "visual novel")),
)

DEFAULT_CATEGORY = MediaCategory.VIDEO


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def category_for_identifier(identifier: str | None) -> MediaCategory | None:
    normalized = _normalize(identifier)
    if not normalized:
        return None
    for category, table_ids in _TABLE_IDS.items():
        if normalized in table_ids:
            return category
    return None


def category_for_heading(heading: str | None) -> MediaCategory | None:
    normalized = _normalize(heading)
    if not normalized:
        return None
    for category, keywords in _HEADING_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return category
    return None


def detect_table_type(hints: TableHints | None = None) -> MediaCategory:
    """Table id first, then the page context, then the heading text; video otherwise."""
    if hints is None:
        return DEFAULT_CATEGORY
    by_identifier = category_for_identifier(hints.identifier)
    if by_identifier is not None:
        return by_identifier
    if hints.context is not None:
        return hints.context
    by_heading = category_for_heading(hints.heading)
    if by_heading is not None:
        return by_heading
    return DEFAULT_CATEGORY

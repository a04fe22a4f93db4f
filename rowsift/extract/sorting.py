"""Column sorting for parsed records, applied inside each table entry."""

from __future__ import annotations

import locale
import re
import unicodedata
from dataclasses import dataclass, replace
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Literal, Optional, Tuple

from rowsift.extract.types import GroupedResult, ParsedRecord

SortDirection = Literal["asc", "desc"]
Comparator = Callable[[ParsedRecord, ParsedRecord], int]

SIZE_RE = re.compile(r"^([0-9,.]+)\s*([KMGT]?i?B)$", re.IGNORECASE)
WXH_RE = re.compile(r"^(\d+)x(\d+)([ip]?)$")
SCAN_RE = re.compile(r"^(\d+)([pi])$")
CHANNELS_RE = re.compile(r"^(\d+(?:\.\d+)?)(?:\s*ch)?$", re.IGNORECASE)

SIZE_MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 ** 2,
    "GB": 1024 ** 3,
    "TB": 1024 ** 4,
    "KIB": 1024,
    "MIB": 1024 ** 2,
    "GIB": 1024 ** 3,
    "TIB": 1024 ** 4,
}

FLAG_WEIGHTS = {
    "best": 8,
    "alternate": 4,
    "freeleech": 2,
    "remastered": 1,
}


@dataclass(frozen=True)
class Resolution:
    width: int = 0
    height: int = 0
    interlaced: bool = False


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def collation_key(text: str) -> str:
    """Casefolded text with accents stripped, so "Émile" files under E."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char)).casefold()


def compare_text(a: str, b: str) -> int:
    """
    Empty strings sort after everything else; the rest by locale collation.

    Base letters decide first, then case and accents, so the order holds
    even when the process runs in the C locale.
    """
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in ((collation_key(a), collation_key(b)), (a.casefold(), b.casefold()), (a, b)):
        result = locale.strcoll(left, right)
        if result:
            return _sign(result)
    return 0


def parse_size(value: str) -> float:
    """Bytes for ``"1.37 GiB"`` style strings; every unit is binary; 0 when unparsable."""
    match = SIZE_RE.match((value or "").strip())
    if not match:
        return 0
    try:
        number = float(match.group(1).replace(",", ""))
    except ValueError:
        return 0
    return number * SIZE_MULTIPLIERS.get(match.group(2).upper(), 1)


def parse_count(value: str) -> int:
    digits = re.sub(r"[^\d]", "", value or "")
    return int(digits) if digits else 0


def parse_resolution(resolution: str, aspect_ratio: str = "") -> Resolution:
    if not resolution:
        return Resolution()

    wxh = WXH_RE.match(resolution)
    if wxh:
        return Resolution(int(wxh.group(1)), int(wxh.group(2)), wxh.group(3) == "i")

    scan = SCAN_RE.match(resolution)
    if scan:
        height = int(scan.group(1))
        return Resolution(_width_for(height, aspect_ratio), height, scan.group(2) == "i")

    if resolution == "4K":
        return Resolution(3840, 2160, False)
    return Resolution()


def _width_for(height: int, aspect_ratio: str) -> int:
    if aspect_ratio and ":" in aspect_ratio:
        w_text, _, h_text = aspect_ratio.partition(":")
        try:
            w, h = float(w_text), float(h_text)
        except ValueError:
            w = h = 0.0
        if w and h:
            return round(height * w / h)
    return round(height * 16 / 9)


def parse_channels(value: str) -> float:
    match = CHANNELS_RE.match((value or "").strip())
    return float(match.group(1)) if match else 0.0


def flag_score(flags: Iterable[str]) -> int:
    """Each fragment contributes the weight of the most valuable indicator it carries."""
    score = 0
    for flag in flags:
        lowered = flag.lower()
        if "seadex" in lowered and "best" in lowered:
            score += FLAG_WEIGHTS["best"]
        elif "seadex" in lowered:
            score += FLAG_WEIGHTS["alternate"]
        elif "freeleech" in lowered:
            score += FLAG_WEIGHTS["freeleech"]
        elif "remastered" in lowered:
            score += FLAG_WEIGHTS["remastered"]
    return score


def _text_column(name: str) -> Comparator:
    return lambda a, b: compare_text(a.value_of(name, "") or "", b.value_of(name, "") or "")


def _bool_column(name: str) -> Comparator:
    # True first
    return lambda a, b: int(bool(b.value_of(name))) - int(bool(a.value_of(name)))


def _compare_size(a: ParsedRecord, b: ParsedRecord) -> int:
    return _sign(parse_size(a.size) - parse_size(b.size))


def _count_column(name: str) -> Comparator:
    return lambda a, b: _sign(parse_count(a.value_of(name, "")) - parse_count(b.value_of(name, "")))


def _compare_resolution(a: ParsedRecord, b: ParsedRecord) -> int:
    res_a = parse_resolution(a.value_of("resolution", ""), a.value_of("aspect_ratio", ""))
    res_b = parse_resolution(b.value_of("resolution", ""), b.value_of("aspect_ratio", ""))
    if res_a.height != res_b.height:
        return _sign(res_a.height - res_b.height)
    if res_a.width != res_b.width:
        return _sign(res_a.width - res_b.width)
    # Progressive after interlaced
    return int(not res_a.interlaced) - int(not res_b.interlaced)


def _compare_channels(a: ParsedRecord, b: ParsedRecord) -> int:
    return _sign(parse_channels(a.value_of("audio_channels", "")) - parse_channels(b.value_of("audio_channels", "")))


def _compare_flags(a: ParsedRecord, b: ParsedRecord) -> int:
    score_diff = flag_score(a.flags) - flag_score(b.flags)
    if score_diff:
        return _sign(score_diff)
    return _sign(len(a.flags) - len(b.flags))


COMPARATORS: Dict[str, Comparator] = {
    # Common
    "group": _text_column("group"),
    "size": _compare_size,
    "snatches": _count_column("snatches"),
    "seeders": _count_column("seeders"),
    "leechers": _count_column("leechers"),
    "flags": _compare_flags,
    # Video
    "format": _text_column("format"),
    "region": _text_column("region"),
    "container": _text_column("container"),
    "video_codec": _text_column("video_codec"),
    "resolution": _compare_resolution,
    "audio": _text_column("audio"),
    "audio_channels": _compare_channels,
    "has_dual_audio": _bool_column("has_dual_audio"),
    "subtitles": _text_column("subtitles"),
    # Printed media
    "printed_media_type": _text_column("printed_media_type"),
    "translator": _text_column("translator"),
    "is_digital": _bool_column("is_digital"),
    "printed_format": _text_column("printed_format"),
    "is_ongoing": _bool_column("is_ongoing"),
    # Games
    "game_type": _text_column("game_type"),
    "platform": _text_column("platform"),
    "game_region": _text_column("game_region"),
    "is_archived": _bool_column("is_archived"),
    # Music
    "music_codec": _text_column("music_codec"),
    "bitrate": _text_column("bitrate"),
    "media": _text_column("media"),
    "has_log": _bool_column("has_log"),
    "has_cue": _bool_column("has_cue"),
}

SORT_COLUMNS: Tuple[str, ...] = tuple(COMPARATORS)


def comparator_for(column: str) -> Comparator:
    try:
        return COMPARATORS[column]
    except KeyError:
        raise ValueError(f"Unknown sort column '{column}'. Supported columns: {', '.join(SORT_COLUMNS)}.") from None


def sort_records(
    records: Iterable[ParsedRecord],
    column: Optional[str],
    direction: SortDirection = "asc",
) -> List[ParsedRecord]:
    """Stable sort of records by one column; ``column=None`` keeps the input order."""
    items = list(records)
    if not column:
        return items
    if direction not in ("asc", "desc"):
        raise ValueError(f"Sort direction must be 'asc' or 'desc', got '{direction}'")

    compare = comparator_for(column)
    if direction == "desc":
        return sorted(items, key=cmp_to_key(lambda a, b: -compare(a, b)))
    return sorted(items, key=cmp_to_key(compare))


def sort_grouped(result: GroupedResult, column: Optional[str], direction: SortDirection = "asc") -> GroupedResult:
    """Sort records inside every entry; entry order never changes."""
    if not column:
        return result
    entries = tuple(
        replace(entry, records=tuple(sort_records(entry.records, column, direction)))
        for entry in result.entries
    )
    return replace(result, entries=entries)


def next_sort_state(
    current_column: Optional[str],
    current_direction: SortDirection,
    clicked: str,
) -> Tuple[Optional[str], SortDirection]:
    """Header click cycle: new column -> asc, asc -> desc, desc -> unsorted."""
    comparator_for(clicked)
    if current_column != clicked:
        return clicked, "asc"
    if current_direction == "asc":
        return clicked, "desc"
    return None, "asc"

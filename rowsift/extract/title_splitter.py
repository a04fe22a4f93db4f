"""Split compound listing titles such as ``"Carnival Phantasm - DVD Special [2011]"``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

YEAR_RE = re.compile(r"\[(\d{4})\]$")
WHITESPACE_RE = re.compile(r"\s+")

# Known subtypes; when two match at the same position the earlier entry wins.
SUBTYPES: Tuple[str, ...] = (
    "TV Series",
    "TV Special",
    "BD Special",
    "DVD Special",
    "Movie",
    "OVA",
    "ONA",
    "Visual Novel",
    "EX Season",
)
MAX_FALLBACK_SUBTYPE_LENGTH = 20
SEPARATOR = " - "


@dataclass(frozen=True)
class TitleParts:
    title: str
    subtype: str = ""
    year: str = ""


def _subtype_pattern(subtype: str) -> re.Pattern:
    return re.compile(rf"\s*-\s*{re.escape(subtype)}\s*$", re.IGNORECASE)


_SUBTYPE_PATTERNS = tuple((subtype, _subtype_pattern(subtype)) for subtype in SUBTYPES)


def _rightmost_subtype(text: str, patterns) -> Optional[Tuple[str, int]]:
    best: Optional[Tuple[str, int]] = None
    for subtype, pattern in patterns:
        match = pattern.search(text)
        if match and (best is None or match.start() > best[1]):
            best = (subtype, match.start())
    return best


def split_title(text: str, subtypes: Optional[Sequence[str]] = None) -> TitleParts:
    """
    Extract ``title``, ``subtype`` and ``year`` from a compound title.

    Without a trailing ``[YYYY]`` the whole string is the title. Otherwise
    the known subtype that starts furthest right wins; failing that, a short
    segment after the last " - " is taken as the subtype.
    """
    clean = WHITESPACE_RE.sub(" ", text or "").strip()
    year_match = YEAR_RE.search(clean)
    if not year_match:
        return TitleParts(title=clean)

    year = year_match.group(1)
    before_year = clean[:year_match.start()].strip()

    patterns = _SUBTYPE_PATTERNS if subtypes is None else tuple((s, _subtype_pattern(s)) for s in subtypes)
    best = _rightmost_subtype(before_year, patterns)
    if best is not None:
        subtype, index = best
        return TitleParts(title=before_year[:index].strip(), subtype=subtype, year=year)

    dash_index = before_year.rfind(SEPARATOR)
    if dash_index > 0:
        candidate = before_year[dash_index + len(SEPARATOR):].strip()
        if len(candidate) <= MAX_FALLBACK_SUBTYPE_LENGTH:
            return TitleParts(title=before_year[:dash_index].strip(), subtype=candidate, year=year)

    return TitleParts(title=before_year, year=year)

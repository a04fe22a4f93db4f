"""Turn one leaf row into a ParsedRecord."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from rowsift import logger
from rowsift.errors import MalformedRowError
from rowsift.extract.classifiers import classifier_for
from rowsift.extract.protocols import CategoryClassifier
from rowsift.extract.tokenizer import delimiter_for, tokenize
from rowsift.extract.types import MediaCategory, ParsedRecord, Recommendation, SourceRow

TORRENT_ID_RE = re.compile(r"torrentid=(\d+)")
GROUP_ID_RE = re.compile(r"[?&]id=(\d+)")
ROW_ID_RE = re.compile(r"torrent_(\d+)")

FREELEECH_TAG = "freeleech"
BEST_TAG = "seadex-best"
ALTERNATE_TAG = "seadex-alt"
RECOMMENDATION_MARKER_CLASSES = ("ab-seadex-icon", "seadex-icon")

# Auxiliary cell positions
SIZE_CELL, SNATCHES_CELL, SEEDERS_CELL, LEECHERS_CELL = 1, 2, 3, 4


@dataclass(frozen=True)
class RowStatus:
    is_freeleech: bool = False
    recommendation: Recommendation = Recommendation.NONE


def _is_recommendation_marker(marker) -> bool:
    return any(cls in marker.classes for cls in RECOMMENDATION_MARKER_CLASSES)


def _freeleech_status(row: SourceRow) -> bool:
    if row.has_tag(FREELEECH_TAG):
        return True
    if any(marker.mentions("freeleech") for marker in row.markers):
        return True
    return "freeleech" in row.main_html.lower()


def _recommendation_status(row: SourceRow) -> Recommendation:
    if row.has_tag(BEST_TAG):
        return Recommendation.BEST
    if row.has_tag(ALTERNATE_TAG):
        return Recommendation.ALTERNATE

    for marker in row.markers:
        if _is_recommendation_marker(marker):
            return Recommendation.BEST if marker.mentions("best") else Recommendation.ALTERNATE

    raw = row.main_html.lower()
    if BEST_TAG in raw or "seadex best" in raw:
        return Recommendation.BEST
    if ALTERNATE_TAG in raw or "seadex alt" in raw:
        return Recommendation.ALTERNATE
    return Recommendation.NONE


def resolve_status(row: SourceRow) -> RowStatus:
    """
    Freeleech and recommendation status for a row.

    Each status is looked up in three tiers and the first tier that answers
    wins:
      1. structural tags on the row (set by whoever tagged the row first);
      2. inline marker elements (classes, title attribute, text);
      3. substring search over the raw main-cell content.
    The recommendation may be attached either as a tag or as inline markup
    depending on when the tagging collaborator ran, so all tiers are needed.
    """
    return RowStatus(
        is_freeleech=_freeleech_status(row),
        recommendation=_recommendation_status(row),
    )


def record_ids(row: SourceRow) -> tuple[str, str]:
    """(torrent id, group id) from the details link, falling back to the row's element id."""
    link = row.link or ""
    torrent_match = TORRENT_ID_RE.search(link)
    group_match = GROUP_ID_RE.search(link)
    torrent_id = torrent_match.group(1) if torrent_match else ""
    if not torrent_id and row.element_id:
        row_match = ROW_ID_RE.search(row.element_id)
        if row_match:
            torrent_id = row_match.group(1)
    return torrent_id, group_match.group(1) if group_match else ""


class RowParser:
    """Parses leaf rows for a single media category."""

    def __init__(self, category: MediaCategory, classifier: Optional[CategoryClassifier] = None):
        self.category = category
        self.classifier = classifier or classifier_for(category)
        self._delimiter = delimiter_for(category)

    def parse(self, row: SourceRow) -> ParsedRecord:
        if not row.link:
            raise MalformedRowError("row has no details link", {"row_id": row.element_id})

        torrent_id, group_id = record_ids(row)
        classification = self.classifier.classify(tokenize(row.descriptor, self._delimiter))
        status = resolve_status(row)

        if status.recommendation is not Recommendation.NONE:
            logger.debug(f"Recommendation {status.recommendation.value} for torrent {torrent_id}")

        return ParsedRecord(
            torrent_id=torrent_id,
            group_id=group_id,
            name=row.descriptor,
            category=self.category,
            category_fields=classification.fields,
            group=classification.group,
            size=row.cell_text(SIZE_CELL),
            snatches=row.cell_text(SNATCHES_CELL),
            seeders=row.cell_text(SEEDERS_CELL),
            leechers=row.cell_text(LEECHERS_CELL),
            flags=tuple(row.flags),
            is_freeleech=status.is_freeleech,
            recommendation=status.recommendation,
            download_link=row.download_link,
            details_link=row.link,
            details_html=row.details_html or "",
            has_details=row.details_html is not None,
        )

    def try_parse(self, row: SourceRow) -> Optional[ParsedRecord]:
        """Parse a row, or log and return None when the row cannot be used."""
        try:
            return self.parse(row)
        except MalformedRowError as exc:
            logger.get_logger().row_skipped(row.element_id, str(exc))
        except Exception as exc:
            logger.get_logger().row_skipped(row.element_id, f"{type(exc).__name__}: {exc}")
        return None

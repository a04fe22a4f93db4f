from __future__ import annotations

import pytest

from rowsift.extract.types import MediaCategory, TableHints
from rowsift.table_type import category_for_heading, category_for_identifier, detect_table_type


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("anime_table", MediaCategory.VIDEO),
        ("Printed_Media_Table", MediaCategory.PRINTED_MEDIA),
        ("games_table", MediaCategory.GAME),
        (" album_table ", MediaCategory.MUSIC),
        ("torrent_table", None),
        ("", None),
        (None, None),
    ],
)
def test_category_for_identifier(identifier, expected) -> None:
    assert category_for_identifier(identifier) is expected


def test_heading_keywords_printed_media_checked_first() -> None:
    assert category_for_heading("Manga Game Adaptation") is MediaCategory.PRINTED_MEDIA
    assert category_for_heading("Visual Novel") is MediaCategory.GAME
    assert category_for_heading("TV Series") is None


def test_precedence_identifier_context_heading() -> None:
    hints = TableHints(identifier="games_table", context=MediaCategory.MUSIC, heading="Manga")
    assert detect_table_type(hints) is MediaCategory.GAME

    hints = TableHints(identifier="unknown", context=MediaCategory.MUSIC, heading="Manga")
    assert detect_table_type(hints) is MediaCategory.MUSIC

    hints = TableHints(identifier="unknown", heading="Light Novel")
    assert detect_table_type(hints) is MediaCategory.PRINTED_MEDIA


def test_defaults_to_video() -> None:
    assert detect_table_type() is MediaCategory.VIDEO
    assert detect_table_type(TableHints()) is MediaCategory.VIDEO
    assert detect_table_type(TableHints(heading="Live Action")) is MediaCategory.VIDEO

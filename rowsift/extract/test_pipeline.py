from __future__ import annotations

from rowsift.extract.pipeline import extract, flatten, run_pass
from rowsift.extract.types import MediaCategory, Recommendation, SourceRow, TableHints, VideoFields

DESCRIPTOR = "TV | Blu-ray | MKV | h264 10-bit | 1920x1080 | FLAC 5.1 | Softsubs (GroupX)"


def _leaf(torrent_id: str, descriptor: str = DESCRIPTOR, size: str = "1 GiB", extra_tags=frozenset()) -> SourceRow:
    return SourceRow(
        tags=frozenset({"group_torrent"}) | extra_tags,
        cells=("main", size, "10", "5", "1"),
        descriptor=descriptor,
        link=f"torrents.php?id=1&torrentid={torrent_id}",
        element_id=f"torrent_{torrent_id}",
    )


ROWS = [
    SourceRow(tags=frozenset({"edition_info"}), title="Blu-ray"),
    _leaf("1", size="8 GiB"),
    _leaf("2", "DVD5 | VOB IFO | 720x480", size="4 GiB", extra_tags=frozenset({"seadex-best"})),
    SourceRow(tags=frozenset({"edition_info"}), title="Web"),
    _leaf("3", "Web | MKV | 1080p", size="900 MiB"),
]


class _ListSink:
    def __init__(self) -> None:
        self.received = []

    def receive(self, result) -> None:
        self.received.append(result)


class _StaticSource:
    def __init__(self, rows, hints=None) -> None:
        self._rows = rows
        self.hints = hints

    def rows(self):
        return list(self._rows)


def test_end_to_end_video_descriptor() -> None:
    result = extract([_leaf("1")], TableHints(identifier="anime_table"))
    record = flatten(result)[0]

    assert record.category is MediaCategory.VIDEO
    assert record.category_fields == VideoFields(
        format="Blu-ray",
        container="MKV",
        video_codec="AVC-10b",
        resolution="1920x1080",
        aspect_ratio="16:9",
        audio="FLAC",
        audio_channels="5.1",
        subtitles="Softsubs",
    )
    assert record.group == "GroupX"


def test_category_is_decided_once_per_pass() -> None:
    result = extract([_leaf("1", "Game | PC | Region Free")], TableHints(heading="Visual Novel"))
    assert result.category is MediaCategory.GAME
    assert result.records()[0].value_of("platform") == "PC"

    forced = extract([_leaf("1", "Game | PC")], TableHints(heading="Visual Novel"), category=MediaCategory.VIDEO)
    assert forced.category is MediaCategory.VIDEO


def test_extract_preserves_order_and_is_idempotent() -> None:
    first = extract(ROWS)
    assert [r.torrent_id for r in flatten(first)] == ["1", "2", "3"]
    assert first == extract(ROWS)
    assert first.records()[1].recommendation is Recommendation.BEST
    assert first.records()[1].value_of("aspect_ratio") == "1.50:1"


def test_empty_rows_give_empty_result() -> None:
    result = extract([])
    assert result.is_empty()
    assert flatten(result) == []


def test_run_pass_sorts_within_sections_and_delivers_once() -> None:
    sink = _ListSink()
    result = run_pass(_StaticSource(ROWS), sink, "size", "asc")

    assert sink.received == [result]
    assert [entry.section.title for entry in result.entries] == ["Blu-ray", "Web"]
    assert [r.torrent_id for r in result.entries[0].records] == ["2", "1"]


def test_run_pass_without_column_keeps_table_order() -> None:
    sink = _ListSink()
    result = run_pass(_StaticSource(ROWS), sink)
    assert [r.torrent_id for r in result.records()] == ["1", "2", "3"]

from __future__ import annotations

import dataclasses

import pytest

from rowsift.extract.types import (
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
    SourceRow,
    VideoFields,
)
from rowsift.extract.sorting import sort_grouped
from rowsift.extract.vocabulary import DEFAULT_VOCABULARIES, VERSION


def _record(**kwargs) -> ParsedRecord:
    values = {
        "torrent_id": "1",
        "group_id": "2",
        "name": "x",
        "category": MediaCategory.VIDEO,
        "category_fields": VideoFields(container="MKV"),
    }
    values.update(kwargs)
    return ParsedRecord(**values)


def test_record_rejects_mismatched_field_set() -> None:
    with pytest.raises(TypeError, match="VideoFields"):
        _record(category_fields=GameFields())


def test_value_of_reads_category_then_common_fields() -> None:
    record = _record(size="1 GiB")
    assert record.value_of("container") == "MKV"
    assert record.value_of("size") == "1 GiB"
    assert record.value_of("platform", "n/a") == "n/a"


def test_recommendation_properties() -> None:
    assert _record(recommendation=Recommendation.BEST).is_best
    assert _record(recommendation=Recommendation.ALTERNATE).is_alternate
    assert not _record().is_best


def test_marker_mentions_is_case_insensitive() -> None:
    marker = InlineMarker(classes=("ab-seadex-icon",), title="SeaDex Best", text="")
    assert marker.mentions("BEST")
    assert marker.mentions("seadex-icon")
    assert not marker.mentions("freeleech")


def test_cell_text_out_of_range_is_empty() -> None:
    row = SourceRow(cells=("a", " 1 GiB "))
    assert row.cell_text(1) == "1 GiB"
    assert row.cell_text(7) == ""
    assert row.cell_text(-1) == ""


def test_grouped_result_records_concatenate_entries() -> None:
    result = GroupedResult(
        MediaCategory.VIDEO,
        (GroupedEntry(None, (_record(torrent_id="1"),)), GroupedEntry(None, (_record(torrent_id="2"),))),
    )
    assert [r.torrent_id for r in result.records()] == ["1", "2"]
    assert not result.is_empty()


def test_vocabularies_are_versioned_and_extendable() -> None:
    assert DEFAULT_VOCABULARIES.video.version == VERSION
    extended = DEFAULT_VOCABULARIES.with_additions(video_formats=[" DCP ", "DVD", ""])
    assert extended.video.formats[-1] == "DCP"
    assert extended.video.formats.count("DVD") == 1
    assert "DCP" not in DEFAULT_VOCABULARIES.video.formats


@pytest.mark.parametrize(
    ("fields", "name"),
    [
        (VideoFields(container="MKV"), "container"),
        (PrintedMediaFields(), "translator"),
        (GameFields(), "is_archived"),
        (MusicFields(), "has_log"),
    ],
)
def test_category_fields_are_frozen(fields, name: str) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        setattr(fields, name, "changed")


def test_sorted_result_leaves_unsorted_result_untouched() -> None:
    small = _record(torrent_id="1", size="1 GiB")
    large = _record(torrent_id="2", size="2 GiB", category_fields=VideoFields(container="AVI"))
    result = GroupedResult(MediaCategory.VIDEO, (GroupedEntry(Group("group_0", "G"), (large, small)),))

    sorted_result = sort_grouped(result, "size")
    with pytest.raises(dataclasses.FrozenInstanceError):
        sorted_result.records()[0].category_fields.container = "WMV"

    assert [r.torrent_id for r in sorted_result.records()] == ["1", "2"]
    assert [r.torrent_id for r in result.records()] == ["2", "1"]
    assert result.records()[1].value_of("container") == "MKV"

from __future__ import annotations

import pytest

from rowsift.extract import normalizers
from rowsift.extract.vocabulary import DEFAULT_VOCABULARIES

AUDIO = DEFAULT_VOCABULARIES.video.audio_codecs


@pytest.mark.parametrize(
    ("resolution", "expected"),
    [
        ("1920x1080", "16:9"),
        ("1280x720", "16:9"),
        ("640x480", "4:3"),
        ("1280x1024", "5:4"),
        ("1998x1080", "1.85:1"),
        ("720x480", "1.50:1"),
        ("720x576", "5:4"),
        ("704x480", "1.47:1"),
        ("1440x1080", "4:3"),
        ("1000x300", "3.33:1"),
    ],
)
def test_aspect_ratio(resolution: str, expected: str) -> None:
    assert normalizers.aspect_ratio(resolution) == expected


def test_aspect_ratio_ignores_non_wxh_and_zero_height() -> None:
    assert normalizers.aspect_ratio("1080p") == ""
    assert normalizers.aspect_ratio("1920x0") == ""
    assert normalizers.aspect_ratio("") == ""


def test_resolution_recognition_and_normalization() -> None:
    assert normalizers.is_resolution("1920x1080")
    assert normalizers.is_resolution("1080p")
    assert normalizers.is_resolution("480i")
    assert normalizers.is_resolution("4K")
    assert not normalizers.is_resolution("HD")

    assert normalizers.normalize_resolution("1920x1080") == "1920x1080"
    assert normalizers.normalize_resolution("720p") == "720p"
    assert normalizers.normalize_resolution("4K") == "2160p"
    assert normalizers.normalize_resolution("Weird") == "Weird"


def test_normalize_codec_maps_informal_names() -> None:
    assert normalizers.normalize_codec("h264") == "AVC"
    assert normalizers.normalize_codec("h264 10-bit") == "AVC-10b"
    assert normalizers.normalize_codec("h265 12-bit") == "HEVC-12b"
    assert normalizers.normalize_codec("XviD") == "XviD"


def test_extract_group_uses_last_parenthesis_pair() -> None:
    assert normalizers.extract_group("Softsubs (GroupX)") == ("Softsubs", "GroupX")
    assert normalizers.extract_group("Softsubs (v2) (GroupY)") == ("Softsubs (v2)", "GroupY")
    assert normalizers.extract_group("Hardsubs") == ("Hardsubs", "")
    assert normalizers.extract_group("Broken) (") == ("Broken) (", "")


def test_parse_audio_splits_codec_and_channels() -> None:
    assert normalizers.parse_audio("FLAC 5.1", AUDIO) == ("FLAC", "5.1")
    assert normalizers.parse_audio("AAC 2ch", AUDIO) == ("AAC", "2ch")
    assert normalizers.parse_audio("DTS-HD MA 7.1", AUDIO) == ("DTS", "7.1")


def test_parse_audio_falls_back_to_remainder() -> None:
    assert normalizers.parse_audio("Mystery 2.0", AUDIO) == ("Mystery", "2.0")
    assert normalizers.parse_audio("Opus", AUDIO) == ("Opus", "")

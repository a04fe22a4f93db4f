from __future__ import annotations

from pathlib import Path

import pytest

from rowsift import config as rowsift_config
from rowsift.config import RowsiftConfig, build_vocabularies, default_config, load_config
from rowsift.extract.vocabulary import DEFAULT_VOCABULARIES


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_all_sections(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[display]
sort_column = "size"
sort_direction = "desc"
show_details = true

[logging]
debug = true
log_file = "out/rowsift.log"

[vocabulary]
containers = ["WEBM"]
game_platforms = ["Saturn"]
""",
    )
    config = load_config(path)

    assert config.display.sort_column == "size"
    assert config.display.sort_direction == "desc"
    assert config.display.show_details is True
    assert config.logging.debug is True
    assert config.logging.log_file == Path("out/rowsift.log")
    assert config.vocabulary.containers == ["WEBM"]
    assert config.config_path == path


def test_empty_sort_column_means_unsorted(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, '[display]\nsort_column = ""\n'))
    assert config.display.sort_column is None


def test_missing_file_exits(tmp_path: Path, monkeypatch) -> None:
    lines: list[str] = []
    monkeypatch.setattr(rowsift_config.console, "print", lambda msg, *_a, **_k: lines.append(str(msg)))

    with pytest.raises(SystemExit) as excinfo:
        load_config(tmp_path / "missing.toml")

    assert excinfo.value.code == 1
    assert "Configuration file not found" in lines[0]


@pytest.mark.parametrize(
    "text",
    [
        '[display]\nsort_column = "colour"\n',
        '[display]\nsort_direction = "sideways"\n',
        "[display\n",
    ],
)
def test_invalid_config_exits(tmp_path: Path, monkeypatch, text: str) -> None:
    lines: list[str] = []
    monkeypatch.setattr(rowsift_config.console, "print", lambda msg, *_a, **_k: lines.append(str(msg)))

    with pytest.raises(SystemExit):
        load_config(_write(tmp_path, text))

    assert "Error loading configuration" in lines[0]


def test_default_config_uses_builtin_vocabularies() -> None:
    config = default_config()
    assert config.display.sort_column is None
    assert config.vocabulary.is_empty()
    assert build_vocabularies(config) is DEFAULT_VOCABULARIES


def test_build_vocabularies_applies_additions() -> None:
    config = RowsiftConfig.model_validate({"vocabulary": {"audio_codecs": ["ALAC"], "music_media": ["SACD"]}})
    vocab = build_vocabularies(config)
    assert vocab.video.audio_codecs[-1] == "ALAC"
    assert vocab.music.media[-1] == "SACD"

from __future__ import annotations

from pathlib import Path

from rich.text import Text

import rowsift.logger as rowsift_logger


def _capture_screen(monkeypatch, log: rowsift_logger.RowsiftLogger) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(log._console, "print", lambda msg, **kwargs: lines.append(str(msg)))
    return lines


def test_prefixed_levels_reach_screen(monkeypatch) -> None:
    log = rowsift_logger.RowsiftLogger()
    lines = _capture_screen(monkeypatch, log)

    log.info("hello")
    log.warning("careful")
    log.error("boom")

    assert lines == ["[INFO] hello", "[WARNING] careful", "[ERROR] boom"]


def test_debug_is_dropped_unless_enabled(monkeypatch) -> None:
    quiet_log = rowsift_logger.RowsiftLogger(debug=False)
    quiet_lines = _capture_screen(monkeypatch, quiet_log)
    quiet_log.debug("hidden")
    quiet_log.pass_summary("video", 2, 5)
    assert quiet_lines == []

    loud_log = rowsift_logger.RowsiftLogger(debug=True)
    loud_lines = _capture_screen(monkeypatch, loud_log)
    loud_log.pass_summary("video", 1, 5)
    assert len(loud_lines) == 1
    assert "[DEBUG] Extracted 5 record(s) in 1 entry (video)" in loud_lines[0]


def test_row_skipped_is_a_warning(monkeypatch) -> None:
    log = rowsift_logger.RowsiftLogger()
    lines = _capture_screen(monkeypatch, log)

    log.row_skipped("torrent_9", "row has no details link")
    log.row_skipped("", "no anchor")

    assert lines == [
        "[WARNING] Skipped row torrent_9: row has no details link",
        "[WARNING] Skipped row (no id): no anchor",
    ]


def test_screen_text_styles_prefix_without_markup() -> None:
    log = rowsift_logger.RowsiftLogger()
    text = log._screen_text("[ERROR] [bold]not markup[/bold]")

    assert isinstance(text, Text)
    assert text.plain == "[ERROR] [bold]not markup[/bold]"
    assert text.spans[0].style == "red"
    assert (text.spans[0].start, text.spans[0].end) == (0, len("[ERROR]"))


def test_quiet_logger_still_writes_file(tmp_path: Path, monkeypatch) -> None:
    log_file = tmp_path / "logs" / "run.log"
    with rowsift_logger.RowsiftLogger(log_file=log_file, quiet=True) as log:
        lines = _capture_screen(monkeypatch, log)
        log.info("written")

    assert lines == []
    content = log_file.read_text(encoding="utf-8").splitlines()
    assert "Started rowsift" in content[0]
    assert content[1] == "[INFO] written"
    assert "Ended session" in content[-1]


def test_module_helpers_use_global_logger(monkeypatch) -> None:
    log = rowsift_logger.RowsiftLogger()
    lines = _capture_screen(monkeypatch, log)
    monkeypatch.setattr(rowsift_logger, "_logger", None)

    rowsift_logger.set_logger(log)
    rowsift_logger.info("via module")

    assert rowsift_logger.get_logger() is log
    assert lines == ["[INFO] via module"]

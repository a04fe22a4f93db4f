"""Sinks that present a grouped result: rich tables or JSON."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rowsift.extract.types import Group, GroupedResult, MediaCategory, ParsedRecord

# (header, field name) per category, after the shared leading columns
CATEGORY_COLUMNS: dict[MediaCategory, tuple[tuple[str, str], ...]] = {
    MediaCategory.VIDEO: (
        ("Format", "format"),
        ("Container", "container"),
        ("Codec", "video_codec"),
        ("Resolution", "resolution"),
        ("Aspect", "aspect_ratio"),
        ("Audio", "audio"),
        ("Ch", "audio_channels"),
        ("Dual", "has_dual_audio"),
        ("Region", "region"),
        ("Subtitles", "subtitles"),
        ("Group", "group"),
    ),
    MediaCategory.PRINTED_MEDIA: (
        ("Type", "printed_media_type"),
        ("Translator", "translator"),
        ("Format", "printed_format"),
        ("Digital", "is_digital"),
        ("Ongoing", "is_ongoing"),
    ),
    MediaCategory.GAME: (
        ("Type", "game_type"),
        ("Platform", "platform"),
        ("Region", "game_region"),
        ("Archived", "is_archived"),
    ),
    MediaCategory.MUSIC: (
        ("Codec", "music_codec"),
        ("Bitrate", "bitrate"),
        ("Media", "media"),
        ("Log", "has_log"),
        ("Cue", "has_cue"),
    ),
}
COUNTER_COLUMNS = (("Size", "size"), ("Snatches", "snatches"), ("Seeders", "seeders"), ("Leechers", "leechers"))


def _cell(value) -> str:
    if value is True:
        return "yes"
    if value is False or value is None:
        return ""
    return str(value)


def _status(record: ParsedRecord) -> str:
    marks = []
    if record.is_best:
        marks.append("best")
    elif record.is_alternate:
        marks.append("alt")
    if record.is_freeleech:
        marks.append("FL")
    return " ".join(marks)


def build_section_table(title: str, records, category: MediaCategory, show_details: bool = False) -> Table:
    table = Table(title=escape(title) if title else None, title_justify="left")
    table.add_column("ID", style="cyan", no_wrap=True)
    for header, _ in CATEGORY_COLUMNS[category]:
        table.add_column(header)
    for header, _ in COUNTER_COLUMNS:
        table.add_column(header, style="green", justify="right")
    table.add_column("Status", style="yellow")
    if show_details:
        table.add_column("Details", justify="right")

    for record in records:
        row = [record.torrent_id]
        row.extend(_cell(record.value_of(name, "")) for _, name in CATEGORY_COLUMNS[category])
        row.extend(_cell(getattr(record, name)) for _, name in COUNTER_COLUMNS)
        row.append(_status(record))
        if show_details:
            row.append(f"{len(record.details_html):,}" if record.has_details else "-")
        table.add_row(*row)
    return table


class ConsoleSink:
    """Prints one rich table per grouped entry."""

    def __init__(self, console: Console | None = None, show_details: bool = False) -> None:
        self.console = console or Console()
        self.show_details = show_details

    def receive(self, result: GroupedResult) -> None:
        if result.is_empty():
            self.console.print("[yellow]No releases found.[/yellow]")
            return
        for entry in result.entries:
            title = ""
            if entry.section is not None:
                label = "Group" if isinstance(entry.section, Group) else "Section"
                title = f"{label}: {entry.section.title.replace(chr(10), ' / ')}"
            if not entry.records:
                self.console.print(f"[bold]{escape(title)}[/bold]")
                continue
            self.console.print(build_section_table(title, entry.records, result.category, self.show_details))


def result_to_dict(result: GroupedResult) -> dict:
    entries = []
    for entry in result.entries:
        section = None
        if entry.section is not None:
            section = asdict(entry.section)
            section["type"] = "group" if isinstance(entry.section, Group) else "section"
        entries.append({"section": section, "records": [record_to_dict(r) for r in entry.records]})
    return {"category": result.category.value, "entries": entries}


def record_to_dict(record: ParsedRecord) -> dict:
    data = asdict(record)
    data["category"] = record.category.value
    data["recommendation"] = record.recommendation.value
    data["flags"] = list(record.flags)
    return data


class JsonSink:
    """Writes the result as a JSON document."""

    def __init__(self, stream: TextIO, indent: int | None = 2) -> None:
        self.stream = stream
        self.indent = indent

    def receive(self, result: GroupedResult) -> None:
        json.dump(result_to_dict(result), self.stream, indent=self.indent, ensure_ascii=False)
        self.stream.write("\n")

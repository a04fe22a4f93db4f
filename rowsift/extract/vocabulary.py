"""Static lookup tables for each media category.

Tables are data: classifiers receive one at construction. ``VERSION`` is
bumped whenever an entry changes so cached results can be invalidated by
whoever caches them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

VERSION = 3


def _extend(base: Tuple[str, ...], extra: Iterable[str]) -> Tuple[str, ...]:
    merged = list(base)
    for item in extra:
        item = item.strip()
        if item and item not in merged:
            merged.append(item)
    return tuple(merged)


@dataclass(frozen=True)
class VideoVocabulary:
    formats: Tuple[str, ...] = ("TV", "DVD", "Blu-ray", "UHD Blu-ray", "HD DVD", "VHS", "VCD", "LD", "Web")
    containers: Tuple[str, ...] = (
        "AVI", "MKV", "MP4", "OGM", "WMV", "MPG", "ISO", "VOB", "VOB IFO", "TS", "M2TS", "FLV", "RMVB",
    )
    codecs: Tuple[str, ...] = (
        "h264", "h264 10-bit", "h265", "h265 10-bit", "h265 12-bit",
        "AVC", "AVC-10b", "HEVC", "HEVC-10b", "HEVC-12b",
        "XviD", "DivX", "WMV", "MPEG-1/2", "VC-1", "MPEG-TS",
        "DVD5", "DVD9", "RealVideo", "VP6", "VP9", "AV1",
    )
    # Order matters: the first entry contained in an audio token wins.
    audio_codecs: Tuple[str, ...] = (
        "MP3", "Vorbis", "Opus", "AAC", "AC3", "TrueHD", "DTS", "DTS-ES", "FLAC",
        "PCM", "WMA", "MP2", "WAV", "DTS-HD", "DTS-HD MA", "RealAudio",
    )
    regions: Tuple[str, ...] = ("A", "B", "C", "R1", "R3", "R4", "R5", "R6", "R2 Japan", "R2 Europe")
    disc_codecs: Tuple[str, ...] = ("DVD5", "DVD9")
    version: int = VERSION


@dataclass(frozen=True)
class PrintedMediaVocabulary:
    types: Tuple[str, ...] = ("Raw", "Translated")
    formats: Tuple[str, ...] = ("EPUB", "PDF", "Archived Scans")
    version: int = VERSION


@dataclass(frozen=True)
class GameVocabulary:
    types: Tuple[str, ...] = ("Game", "Patch", "DLC")
    platforms: Tuple[str, ...] = (
        "PC", "PS2", "PSP", "PSX", "GameCube", "Wii", "GBA", "NDS", "N64",
        "SNES", "NES", "Dreamcast", "PS3", "3DS", "PS Vita", "Switch",
    )
    regions: Tuple[str, ...] = ("Region Free", "NTSC-J", "NTSC-U", "PAL", "JPN", "ENG", "EUR")
    version: int = VERSION


@dataclass(frozen=True)
class MusicVocabulary:
    codecs: Tuple[str, ...] = ("AAC", "MP3", "FLAC")
    bitrates: Tuple[str, ...] = ("192", "V2 (VBR)", "256", "V0 (VBR)", "320", "Lossless", "Lossless 24-bit")
    media: Tuple[str, ...] = ("CD", "DVD", "Blu-ray", "Cassette", "Vinyl", "Soundboard", "Web")
    version: int = VERSION


@dataclass(frozen=True)
class Vocabularies:
    video: VideoVocabulary = VideoVocabulary()
    printed_media: PrintedMediaVocabulary = PrintedMediaVocabulary()
    game: GameVocabulary = GameVocabulary()
    music: MusicVocabulary = MusicVocabulary()

    def with_additions(
        self,
        *,
        video_formats: Iterable[str] = (),
        containers: Iterable[str] = (),
        video_codecs: Iterable[str] = (),
        audio_codecs: Iterable[str] = (),
        video_regions: Iterable[str] = (),
        game_platforms: Iterable[str] = (),
        game_regions: Iterable[str] = (),
        music_media: Iterable[str] = (),
    ) -> "Vocabularies":
        """Return a copy with extra entries appended to the named tables."""
        video = replace(
            self.video,
            formats=_extend(self.video.formats, video_formats),
            containers=_extend(self.video.containers, containers),
            codecs=_extend(self.video.codecs, video_codecs),
            audio_codecs=_extend(self.video.audio_codecs, audio_codecs),
            regions=_extend(self.video.regions, video_regions),
        )
        game = replace(
            self.game,
            platforms=_extend(self.game.platforms, game_platforms),
            regions=_extend(self.game.regions, game_regions),
        )
        music = replace(self.music, media=_extend(self.music.media, music_media))
        return replace(self, video=video, game=game, music=music)


DEFAULT_VOCABULARIES = Vocabularies()

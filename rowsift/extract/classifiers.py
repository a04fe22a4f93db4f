"""Per-category classifiers that turn descriptor tokens into typed fields.

Every classifier walks the tokens in order and hands each one to the first
rule that accepts it. Rules overlap on purpose (``DVD5`` is both a codec and
a format cue), so the rule order below is part of the contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from rowsift.extract import normalizers
from rowsift.extract.protocols import CategoryClassifier
from rowsift.extract.types import (
    CategoryFields,
    GameFields,
    MediaCategory,
    MusicFields,
    PrintedMediaFields,
    VideoFields,
)
from rowsift.extract.vocabulary import (
    DEFAULT_VOCABULARIES,
    GameVocabulary,
    MusicVocabulary,
    PrintedMediaVocabulary,
    VideoVocabulary,
    Vocabularies,
)

DUAL_AUDIO_RE = re.compile(r"dual\s+audio", re.IGNORECASE)
SUBTITLES_RE = re.compile(r"(subtitle|softsub|hardsub|raw)", re.IGNORECASE)
CONTAINER_REGION_RE = re.compile(r"^([A-Z0-9\s]+)\s*\(([^)]+)\)$", re.IGNORECASE)
TYPED_TRANSLATION_RE = re.compile(r"^(translated|raw)\s*\(([^)]+)\)$", re.IGNORECASE)
PARENTHESISED_RE = re.compile(r"^\([^)]+\)$")


@dataclass(frozen=True)
class Classification:
    fields: CategoryFields
    group: str = ""


class VideoClassifier:
    category = MediaCategory.VIDEO

    def __init__(self, vocabulary: VideoVocabulary = DEFAULT_VOCABULARIES.video):
        self.vocabulary = vocabulary
        self._formats = set(vocabulary.formats)
        self._formats_lower = {fmt.lower(): fmt for fmt in reversed(vocabulary.formats)}
        self._containers = set(vocabulary.containers)
        self._codecs = set(vocabulary.codecs)
        self._disc_codecs = set(vocabulary.disc_codecs)
        self._regions = set(vocabulary.regions)
        self._audio_lower = [codec.lower() for codec in vocabulary.audio_codecs]

    def classify(self, tokens: List[str]) -> Classification:
        values: Dict[str, Any] = {}
        group = ""

        for token in tokens:
            part = token.strip()
            if not part or "<img" in part:
                continue

            if normalizers.is_resolution(part):
                if normalizers.RESOLUTION_WXH_RE.match(part):
                    values["resolution"] = part
                    if not values.get("aspect_ratio"):
                        values["aspect_ratio"] = normalizers.aspect_ratio(part)
                else:
                    values["resolution"] = normalizers.normalize_resolution(part)
            elif normalizers.ASPECT_RATIO_RE.match(part):
                values["aspect_ratio"] = part
            elif part in self._disc_codecs:
                # A disc image size implies the DVD format as well as the codec.
                values["format"] = "DVD"
                values["video_codec"] = part
            elif part in self._codecs:
                values["video_codec"] = part
            elif self._mentions_audio_codec(part):
                values["audio"], values["audio_channels"] = normalizers.parse_audio(
                    part, self.vocabulary.audio_codecs
                )
            elif DUAL_AUDIO_RE.search(part):
                values["has_dual_audio"] = True
            elif SUBTITLES_RE.search(part):
                clean, subbing_group = normalizers.extract_group(part)
                values["subtitles"] = clean
                if subbing_group and not group:
                    group = subbing_group
            elif part in self._containers:
                values["container"] = part
            elif CONTAINER_REGION_RE.match(part):
                self._apply_container_region(part, values)
            elif part in self._formats:
                values["format"] = part
            elif not values.get("format"):
                values["format"] = self._formats_lower.get(part.lower(), part)

        if values.get("video_codec"):
            values["video_codec"] = normalizers.normalize_codec(values["video_codec"])

        return Classification(fields=VideoFields(**values), group=group)

    def _mentions_audio_codec(self, part: str) -> bool:
        lowered = part.lower()
        return any(codec in lowered for codec in self._audio_lower)

    def _apply_container_region(self, part: str, values: Dict[str, Any]) -> None:
        match = CONTAINER_REGION_RE.match(part)
        base = match.group(1).strip()
        region = match.group(2).strip()
        if base in self._containers:
            values["container"] = base
            if region in self._regions:
                values["region"] = region


class PrintedMediaClassifier:
    category = MediaCategory.PRINTED_MEDIA

    def __init__(self, vocabulary: PrintedMediaVocabulary = DEFAULT_VOCABULARIES.printed_media):
        self.vocabulary = vocabulary
        self._types = {name.lower(): name for name in vocabulary.types}
        self._formats = {name.lower(): name for name in vocabulary.formats}

    def classify(self, tokens: List[str]) -> Classification:
        values: Dict[str, Any] = {}

        for token in tokens:
            part = token.strip()
            if not part:
                continue
            lowered = part.lower()

            typed = TYPED_TRANSLATION_RE.match(part)
            if typed:
                values["printed_media_type"] = self._types.get(typed.group(1).lower(), typed.group(1))
                values["translator"] = typed.group(2).strip()
            elif lowered in self._types:
                values["printed_media_type"] = self._types[lowered]
            elif PARENTHESISED_RE.match(part):
                values["translator"] = part[1:-1]
            elif lowered in self._formats:
                values["printed_format"] = self._formats[lowered]
            elif lowered == "digital":
                values["is_digital"] = True
            elif lowered == "ongoing":
                values["is_ongoing"] = True

        return Classification(fields=PrintedMediaFields(**values))


class GameClassifier:
    category = MediaCategory.GAME

    def __init__(self, vocabulary: GameVocabulary = DEFAULT_VOCABULARIES.game):
        self.vocabulary = vocabulary
        self._types = {name.lower(): name for name in vocabulary.types}
        self._platforms = set(vocabulary.platforms)
        self._regions = set(vocabulary.regions)

    def classify(self, tokens: List[str]) -> Classification:
        values: Dict[str, Any] = {}

        for token in tokens:
            part = token.strip()
            if not part:
                continue
            lowered = part.lower()

            if lowered in self._types:
                values["game_type"] = self._types[lowered]
            elif part in self._platforms:
                values["platform"] = part
            elif part in self._regions:
                values["game_region"] = part
            elif lowered == "archived":
                values["is_archived"] = True
            elif lowered == "unarchived":
                values["is_archived"] = False

        return Classification(fields=GameFields(**values))


class MusicClassifier:
    category = MediaCategory.MUSIC

    def __init__(self, vocabulary: MusicVocabulary = DEFAULT_VOCABULARIES.music):
        self.vocabulary = vocabulary
        self._codecs = set(vocabulary.codecs)
        self._bitrates = set(vocabulary.bitrates)
        self._media = set(vocabulary.media)

    def classify(self, tokens: List[str]) -> Classification:
        values: Dict[str, Any] = {}

        for token in tokens:
            part = token.strip()
            if not part:
                continue

            if part in self._codecs:
                values["music_codec"] = part
            elif part in self._bitrates:
                values["bitrate"] = part
            elif part in self._media:
                values["media"] = part
            elif part.lower() == "log":
                values["has_log"] = True
            elif part.lower() == "cue":
                values["has_cue"] = True

        return Classification(fields=MusicFields(**values))


def build_classifiers(vocabularies: Optional[Vocabularies] = None) -> Dict[MediaCategory, CategoryClassifier]:
    """One classifier per category, sharing a single set of vocabularies."""
    vocab = vocabularies or DEFAULT_VOCABULARIES
    return {
        MediaCategory.VIDEO: VideoClassifier(vocab.video),
        MediaCategory.PRINTED_MEDIA: PrintedMediaClassifier(vocab.printed_media),
        MediaCategory.GAME: GameClassifier(vocab.game),
        MediaCategory.MUSIC: MusicClassifier(vocab.music),
    }


def classifier_for(category: MediaCategory, vocabularies: Optional[Vocabularies] = None) -> CategoryClassifier:
    return build_classifiers(vocabularies)[category]

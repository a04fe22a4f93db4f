"""Pure functions that turn raw descriptor tokens into canonical values."""

import re
from typing import Iterable, Tuple

RESOLUTION_WXH_RE = re.compile(r"^(\d+)x(\d+)$")
RESOLUTION_SCAN_RE = re.compile(r"^\d+(p|i)$")
ASPECT_RATIO_RE = re.compile(r"^\d+:\d+$")
CHANNELS_RE = re.compile(r"([\d.]+\s*ch|\d\.\d)", re.IGNORECASE)

# Named resolutions seen on older listings
RESOLUTION_LABELS = {
    "4K": "2160p",
}

COMMON_ASPECT_RATIOS: Tuple[Tuple[float, str], ...] = (
    (16 / 9, "16:9"),
    (4 / 3, "4:3"),
    (3 / 2, "3:2"),
    (5 / 4, "5:4"),
    (1.85, "1.85:1"),
    (2.35, "2.35:1"),
)
ASPECT_RATIO_TOLERANCE = 0.01

# NTSC DVD storage frames use non-square pixels, so they are never snapped.
ANAMORPHIC_FRAMES = frozenset({(720, 480), (704, 480)})

CODEC_NAMES = {
    "h264": "AVC",
    "h264 10-bit": "AVC-10b",
    "h265": "HEVC",
    "h265 10-bit": "HEVC-10b",
    "h265 12-bit": "HEVC-12b",
}


def is_resolution(token: str) -> bool:
    return bool(RESOLUTION_WXH_RE.match(token) or RESOLUTION_SCAN_RE.match(token) or token == "4K")


def normalize_resolution(token: str) -> str:
    if RESOLUTION_WXH_RE.match(token) or RESOLUTION_SCAN_RE.match(token):
        return token
    return RESOLUTION_LABELS.get(token, token)


def aspect_ratio(resolution: str) -> str:
    """Aspect ratio of a ``WIDTHxHEIGHT`` string, snapped to a common ratio when close."""
    match = RESOLUTION_WXH_RE.match(resolution or "")
    if not match:
        return ""
    width, height = int(match.group(1)), int(match.group(2))
    if height == 0:
        return ""
    ratio = width / height

    if (width, height) not in ANAMORPHIC_FRAMES:
        for target, label in COMMON_ASPECT_RATIOS:
            if abs(ratio - target) < ASPECT_RATIO_TOLERANCE:
                return label

    return f"{ratio:.2f}:1"


def normalize_codec(name: str) -> str:
    return CODEC_NAMES.get(name, name)


def extract_group(text: str) -> Tuple[str, str]:
    """Split ``"Softsubs (GroupX)"`` into ``("Softsubs", "GroupX")`` using the last parenthesis pair."""
    open_idx = text.rfind("(")
    close_idx = text.rfind(")")
    if open_idx != -1 and close_idx > open_idx:
        return text[:open_idx].strip(), text[open_idx + 1:close_idx].strip()
    return text, ""


def parse_audio(text: str, vocabulary: Iterable[str]) -> Tuple[str, str]:
    """Return ``(codec, channels)`` for an audio token such as ``"FLAC 5.1"``."""
    match = CHANNELS_RE.search(text)
    channels = match.group(0) if match else ""
    remainder = CHANNELS_RE.sub("", text, count=1).strip()

    lowered = remainder.lower()
    for codec in vocabulary:
        if codec.lower() in lowered:
            return codec, channels
    return remainder, channels

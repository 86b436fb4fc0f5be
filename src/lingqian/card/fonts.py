"""Font stacks and font loading for the share card."""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import ImageFont

from lingqian.card.text import Measure
from lingqian.errors import MeasurementError

logger = logging.getLogger(__name__)


class FontFamily(Enum):
    """Font stacks used on the card."""

    CJK_SERIF = "cjk-serif"
    LATIN_SERIF = "latin-serif"
    SANS = "sans"


@dataclass(frozen=True)
class FontSpec:
    """A concrete font request: family, pixel size and style."""

    family: FontFamily
    size: int
    bold: bool = False
    italic: bool = False


DEFAULT_LANGUAGE = "zh"

# Language -> family for titles and body text
FONT_STACKS: Dict[str, FontFamily] = {
    "zh": FontFamily.CJK_SERIF,
    "en": FontFamily.LATIN_SERIF,
}


def text_family(language: str) -> FontFamily:
    """Font family for running text in the given language."""
    return FONT_STACKS.get(language, FONT_STACKS[DEFAULT_LANGUAGE])


# Candidate font files, tried in order: (family, bold, italic) -> paths
_FONT_PATHS: Dict[Tuple[FontFamily, bool, bool], List[str]] = {
    (FontFamily.CJK_SERIF, False, False): [
        "/usr/share/fonts/opentype/noto/NotoSerifCJK-Regular.ttc",
        "/usr/share/fonts/noto-cjk/NotoSerifCJK-Regular.ttc",
        "/usr/share/fonts/truetype/arphic/ukai.ttc",
        "/System/Library/Fonts/Supplemental/Songti.ttc",
        "C:/Windows/Fonts/simkai.ttf",
        "C:/Windows/Fonts/simsun.ttc",
    ],
    (FontFamily.CJK_SERIF, True, False): [
        "/usr/share/fonts/opentype/noto/NotoSerifCJK-Bold.ttc",
        "/usr/share/fonts/noto-cjk/NotoSerifCJK-Bold.ttc",
        "/usr/share/fonts/truetype/arphic/ukai.ttc",
        "/System/Library/Fonts/Supplemental/Songti.ttc",
        "C:/Windows/Fonts/simkai.ttf",
        "C:/Windows/Fonts/simsun.ttc",
    ],
    (FontFamily.LATIN_SERIF, False, False): [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSerif-Regular.ttf",
        "/System/Library/Fonts/Supplemental/Georgia.ttf",
        "C:/Windows/Fonts/georgia.ttf",
    ],
    (FontFamily.LATIN_SERIF, True, False): [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSerif-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Georgia Bold.ttf",
        "C:/Windows/Fonts/georgiab.ttf",
    ],
    (FontFamily.LATIN_SERIF, False, True): [
        "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Italic.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSerif-Italic.ttf",
        "/System/Library/Fonts/Supplemental/Georgia Italic.ttf",
        "C:/Windows/Fonts/georgiai.ttf",
    ],
    (FontFamily.SANS, False, False): [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "C:/Windows/Fonts/arial.ttf",
    ],
    (FontFamily.SANS, True, False): [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "C:/Windows/Fonts/arialbd.ttf",
    ],
}


def candidate_paths(spec: FontSpec) -> List[str]:
    """Font files to try for a spec, most specific style first."""
    styles = [(spec.bold, spec.italic), (spec.bold, False), (False, False)]
    paths: List[str] = []
    for bold, italic in styles:
        for path in _FONT_PATHS.get((spec.family, bold, italic), []):
            if path not in paths:
                paths.append(path)
    return paths


class FontBook:
    """Loads and caches fonts for card rendering.

    Extra font directories are searched (by file name) before the system
    paths. When nothing is found, Pillow's bundled font is used at the
    requested size. Loading is serialized, so threads sharing a book get
    the same font object for a spec.
    """

    def __init__(self, font_dirs: Optional[Iterable[Path]] = None):
        self._font_dirs: Sequence[Path] = [Path(d) for d in (font_dirs or [])]
        self._font_cache: Dict[FontSpec, ImageFont.FreeTypeFont] = {}
        self._lock = threading.Lock()

    def _paths_for(self, spec: FontSpec) -> List[str]:
        system_paths = candidate_paths(spec)
        local_paths = [
            str(font_dir / Path(path).name)
            for font_dir in self._font_dirs
            for path in system_paths
        ]
        return local_paths + system_paths

    def get(self, spec: FontSpec):
        """Get a font for the spec, with caching."""
        with self._lock:
            font = self._font_cache.get(spec)
            if font is None:
                font = self._load(spec)
                self._font_cache[spec] = font
            return font

    def _load(self, spec: FontSpec):
        for path in self._paths_for(spec):
            try:
                font = ImageFont.truetype(path, spec.size)
            except OSError:
                continue
            logger.debug(f"Loaded {spec.family.value} font from {path}")
            return font

        logger.warning(
            f"No {spec.family.value} font found for size {spec.size}, using default"
        )
        return ImageFont.load_default(size=spec.size)

    def measure(self, spec: FontSpec) -> Measure:
        """Width function for strings set in the given font."""
        try:
            font = self.get(spec)
        except Exception as exc:
            raise MeasurementError(f"Cannot load font {spec}: {exc}") from exc
        return font.getlength

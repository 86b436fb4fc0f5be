"""Layout pass for the share card.

The card is a fixed sequence of blocks (``CARD_BLOCKS``). ``plan_card``
walks that sequence once, wrapping text with real font metrics, and records
where every block starts. The renderer replays the same plan, so the canvas
height and the painted content can never disagree.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from lingqian.card.fonts import FontFamily, FontSpec, text_family
from lingqian.card.geometry import DEFAULT_GEOMETRY, CardGeometry
from lingqian.card.text import Measure, wrap_text
from lingqian.core.sign import RenderRequest

logger = logging.getLogger(__name__)

Measurer = Callable[[FontSpec], Measure]


class Alignment(Enum):
    """Text alignment options."""

    LEFT = "left"
    CENTER = "center"


class BlockKind(Enum):
    TEXT = "text"
    QR = "qr"


class FontRole(Enum):
    """Typographic role of a text block."""

    TITLE = "title"
    REQUEST = "request"
    DATE = "date"
    LUCK = "luck"
    SECTION_TITLE = "section_title"
    BODY = "body"
    SUMMARY = "summary"


# role -> (geometry size field, fixed family or None for the language stack, bold, italic)
ROLE_FONTS: Dict[FontRole, Tuple[str, Optional[FontFamily], bool, bool]] = {
    FontRole.TITLE: ("title_size", None, True, False),
    FontRole.REQUEST: ("request_size", None, True, False),
    FontRole.DATE: ("date_size", None, False, True),
    FontRole.LUCK: ("luck_size", FontFamily.SANS, True, False),
    FontRole.SECTION_TITLE: ("section_title_size", None, True, False),
    FontRole.BODY: ("body_size", None, False, False),
    FontRole.SUMMARY: ("summary_size", None, True, False),
}


def font_for(role: FontRole, language: str, geometry: CardGeometry) -> FontSpec:
    """Font spec for a block role in the active language."""
    size_field, family, bold, italic = ROLE_FONTS[role]
    return FontSpec(
        family=family or text_family(language),
        size=getattr(geometry, size_field),
        bold=bold,
        italic=italic,
    )


@dataclass(frozen=True)
class Shadow:
    """Soft drop shadow behind text."""

    color: Tuple[int, int, int, int]
    blur: float
    offset: Tuple[int, int] = (1, 1)


@dataclass(frozen=True)
class BlockSpec:
    """One entry of the card's block sequence.

    Numeric fields name attributes of ``CardGeometry`` so that sizes and
    spacing live in a single table.
    """

    key: str
    kind: BlockKind = BlockKind.TEXT
    role: Optional[FontRole] = None
    alignment: Alignment = Alignment.CENTER
    wrap: bool = False
    line_ratio: Optional[str] = None  # None: line height equals font size
    space_before: Optional[str] = None
    space_after: Optional[str] = None
    divider: bool = False
    color: str = "#5D4037"
    shadow: Optional[Shadow] = None


TITLE_SHADOW = Shadow(color=(0, 0, 0, 26), blur=2)
LUCK_SHADOW = Shadow(color=(180, 120, 0, 102), blur=4)

CARD_BLOCKS: Tuple[BlockSpec, ...] = (
    BlockSpec(
        "title",
        role=FontRole.TITLE,
        space_after="space_after_title",
        color="#5D4037",
        shadow=TITLE_SHADOW,
    ),
    BlockSpec(
        "request",
        role=FontRole.REQUEST,
        wrap=True,
        line_ratio="request_line_ratio",
        space_after="space_after_request",
        color="#795548",
    ),
    BlockSpec(
        "date",
        role=FontRole.DATE,
        space_after="space_after_date",
        color="#9E8A7A",
    ),
    BlockSpec(
        "luck",
        role=FontRole.LUCK,
        line_ratio="luck_line_ratio",
        space_after="space_after_luck",
        color="#FFC107",
        shadow=LUCK_SHADOW,
    ),
    BlockSpec(
        "prophecy_title",
        role=FontRole.SECTION_TITLE,
        alignment=Alignment.LEFT,
        space_after="space_after_section_title",
        divider=True,
        color="#4E342E",
    ),
    BlockSpec(
        "prophecy_body",
        role=FontRole.BODY,
        alignment=Alignment.LEFT,
        wrap=True,
        line_ratio="body_line_ratio",
        space_after="space_between_sections",
        color="#5D4037",
    ),
    BlockSpec(
        "fortune_title",
        role=FontRole.SECTION_TITLE,
        alignment=Alignment.LEFT,
        space_after="space_after_section_title",
        divider=True,
        color="#4E342E",
    ),
    BlockSpec(
        "fortune_body",
        role=FontRole.BODY,
        alignment=Alignment.LEFT,
        wrap=True,
        line_ratio="body_line_ratio",
        space_after="space_before_summary",
        color="#5D4037",
    ),
    BlockSpec(
        "summary",
        role=FontRole.SUMMARY,
        wrap=True,
        line_ratio="summary_line_ratio",
        space_after="space_after_summary",
        divider=True,
        color="#6D4C41",
    ),
    BlockSpec("qr", kind=BlockKind.QR, space_before="space_before_qr"),
)


# Built-in labels used when a translation is missing
DEFAULT_LABELS: Dict[str, str] = {
    "appTitle": "灵签玄机",
    "ancientProphecyTitle": "Ancient Prophecy",
    "overallFortuneTitle": "Overall Fortune",
    "noDataLabel": "(No Data)",
}

_MONTHS_EN = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DATE_FORMATTERS: Dict[str, Callable[[date], str]] = {
    "zh": lambda d: f"{d.year}年{d.month}月{d.day}日",
    "en": lambda d: f"{_MONTHS_EN[d.month - 1]} {d.day}, {d.year}",
}


def format_card_date(day: date, language: str) -> str:
    """Long date in the card's language (English format for unknown ones)."""
    formatter = DATE_FORMATTERS.get(language, DATE_FORMATTERS["en"])
    return formatter(day)


def block_texts(request: RenderRequest) -> Dict[str, str]:
    """Resolve the text of every text block.

    Missing sign fields get the "no data" label. The user request and the
    luck index stay empty when missing.
    """
    sign = request.sign

    def label(key: str) -> str:
        return request.label(key, DEFAULT_LABELS[key])

    no_data = label("noDataLabel")
    return {
        "title": label("appTitle"),
        "request": request.user_request or "",
        "date": format_card_date(request.issued_on, request.language),
        "luck": sign.luck_index or "",
        "prophecy_title": label("ancientProphecyTitle"),
        "prophecy_body": sign.prophecy_text or no_data,
        "fortune_title": label("overallFortuneTitle"),
        "fortune_body": sign.fortune_text or no_data,
        "summary": sign.summary_text or no_data,
    }


@dataclass(frozen=True)
class PlannedBlock:
    """A block placed on the card."""

    spec: BlockSpec
    lines: Tuple[str, ...]
    font: Optional[FontSpec]
    line_height: float
    start_y: float
    height: float

    @property
    def end_y(self) -> float:
        return self.start_y + self.height


@dataclass(frozen=True)
class LayoutPlan:
    """Result of the layout pass, consumed once by the renderer."""

    blocks: Tuple[PlannedBlock, ...]
    width: int
    content_height: float
    total_height: int
    language: str
    geometry: CardGeometry = DEFAULT_GEOMETRY

    def block(self, key: str) -> PlannedBlock:
        for planned in self.blocks:
            if planned.spec.key == key:
                return planned
        raise KeyError(key)


def _metric(geometry: CardGeometry, name: Optional[str]) -> float:
    return getattr(geometry, name) if name else 0


def plan_card(
    request: RenderRequest,
    measurer: Measurer,
    geometry: CardGeometry = DEFAULT_GEOMETRY,
) -> LayoutPlan:
    """Measure every block and compute the card height.

    Args:
        request: What to put on the card
        measurer: Returns a width function for a font spec
        geometry: Shared size and spacing table

    Returns:
        LayoutPlan with per-block offsets and the final canvas height
    """
    texts = block_texts(request)
    placed: List[Tuple[BlockSpec, Tuple[str, ...], Optional[FontSpec], float, float, float]] = []
    y = float(geometry.top_padding)

    for spec in CARD_BLOCKS:
        y += _metric(geometry, spec.space_before)

        if spec.kind is BlockKind.QR:
            size = geometry.qr_size
            placed.append((spec, (), None, size, y, size))
            y += size + _metric(geometry, spec.space_after)
            continue

        font = font_for(spec.role, request.language, geometry)
        text = texts[spec.key]
        if spec.wrap:
            lines = tuple(wrap_text(text, geometry.content_width, measurer(font)))
        else:
            lines = (text,)

        ratio = _metric(geometry, spec.line_ratio) or 1.0
        line_height = font.size * ratio
        height = len(lines) * line_height
        placed.append((spec, lines, font, line_height, y, height))
        y += height + _metric(geometry, spec.space_after)

    content_height = y + geometry.bottom_padding
    total_height = max(math.ceil(content_height), geometry.min_height)

    blocks: List[PlannedBlock] = []
    for spec, lines, font, line_height, start_y, height in placed:
        if spec.kind is BlockKind.QR:
            # The QR code sits on the bottom edge, whatever the floor added
            start_y = total_height - geometry.bottom_padding - geometry.qr_size
        blocks.append(PlannedBlock(spec, lines, font, line_height, start_y, height))

    logger.debug(
        f"Planned card: {len(blocks)} blocks, content {content_height:.1f}px, "
        f"canvas {geometry.width}x{total_height}"
    )
    return LayoutPlan(
        blocks=tuple(blocks),
        width=geometry.width,
        content_height=content_height,
        total_height=total_height,
        language=request.language,
        geometry=geometry,
    )

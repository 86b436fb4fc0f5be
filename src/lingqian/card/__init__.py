"""Card module for LINGQIAN - shareable fortune card images."""

from lingqian.card.composer import CardComposer, CardImage, ShareResult, share_card
from lingqian.card.fonts import FontBook, FontFamily, FontSpec
from lingqian.card.geometry import CardGeometry
from lingqian.card.layout import CARD_BLOCKS, LayoutPlan, PlannedBlock, plan_card
from lingqian.card.renderer import render_card
from lingqian.card.text import wrap_text

__all__ = [
    # Composer
    "CardComposer",
    "CardImage",
    "ShareResult",
    "share_card",
    # Layout
    "CARD_BLOCKS",
    "CardGeometry",
    "LayoutPlan",
    "PlannedBlock",
    "plan_card",
    "render_card",
    "wrap_text",
    # Fonts
    "FontBook",
    "FontFamily",
    "FontSpec",
]

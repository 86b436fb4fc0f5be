"""Paint pass for the share card.

Replays a ``LayoutPlan`` onto a Pillow image. Every vertical position comes
from the plan; the only numbers defined here are colors.
"""

import logging
from typing import Optional

from PIL import Image, ImageDraw, ImageFilter

from lingqian.card.fonts import FontBook
from lingqian.card.layout import Alignment, BlockKind, LayoutPlan, PlannedBlock
from lingqian.errors import CardRenderError

logger = logging.getLogger(__name__)

BACKGROUND = "#FFFDF7"
OUTER_BORDER = "#D0BBA0"
INNER_BORDER = "#F0E6D2"
DIVIDER = "#E0D6C0"


def new_canvas(plan: LayoutPlan) -> Image.Image:
    """Blank canvas sized for the plan."""
    return Image.new("RGB", (plan.width, plan.total_height), BACKGROUND)


def _paint_frame(draw: ImageDraw.ImageDraw, plan: LayoutPlan) -> None:
    g = plan.geometry
    width, height = plan.width, plan.total_height

    draw.rectangle([0, 0, width - 1, height - 1], fill=BACKGROUND)
    draw.rectangle(
        [0, 0, width - 1, height - 1],
        outline=OUTER_BORDER,
        width=g.outer_border_width,
    )
    inset = g.inner_border_inset - g.inner_border_width // 2
    draw.rectangle(
        [inset, inset, width - 1 - inset, height - 1 - inset],
        outline=INNER_BORDER,
        width=g.inner_border_width,
    )


def _paint_divider(draw: ImageDraw.ImageDraw, plan: LayoutPlan, block: PlannedBlock) -> None:
    g = plan.geometry
    y = round(block.start_y - g.divider_offset)
    draw.line(
        [(g.side_padding, y), (plan.width - g.side_padding, y)],
        fill=DIVIDER,
        width=1,
    )


def _line_anchor(plan: LayoutPlan, block: PlannedBlock):
    if block.spec.alignment == Alignment.CENTER:
        return plan.width / 2, "ms"
    return plan.geometry.side_padding, "ls"


def _paint_text(
    canvas: Image.Image,
    plan: LayoutPlan,
    block: PlannedBlock,
    fonts: FontBook,
) -> float:
    """Draw a text block line by line and return the y below it."""
    font = fonts.get(block.font)
    x, anchor = _line_anchor(plan, block)
    baseline_offset = block.font.size * plan.geometry.baseline_ratio

    shadow = block.spec.shadow
    if shadow is not None:
        layer = Image.new("RGBA", canvas.size, shadow.color[:3] + (0,))
        layer_draw = ImageDraw.Draw(layer)
        dx, dy = shadow.offset
        for i, line in enumerate(block.lines):
            baseline = block.start_y + i * block.line_height + baseline_offset
            layer_draw.text((x + dx, baseline + dy), line, font=font, fill=shadow.color, anchor=anchor)
        layer = layer.filter(ImageFilter.GaussianBlur(shadow.blur / 2))
        canvas.paste(layer, (0, 0), layer)

    draw = ImageDraw.Draw(canvas)
    y = block.start_y
    for line in block.lines:
        draw.text((x, y + baseline_offset), line, font=font, fill=block.spec.color, anchor=anchor)
        y += block.line_height
    return y


def _paint_qr(canvas: Image.Image, plan: LayoutPlan, block: PlannedBlock, qr_image: Image.Image) -> float:
    size = plan.geometry.qr_size
    if qr_image.size != (size, size):
        qr_image = qr_image.resize((size, size), Image.Resampling.NEAREST)
    x = (plan.width - size) // 2
    canvas.paste(qr_image.convert("RGB"), (x, round(block.start_y)))
    return block.start_y + size


def render_card(
    plan: LayoutPlan,
    canvas: Image.Image,
    fonts: FontBook,
    qr_image: Optional[Image.Image] = None,
) -> float:
    """Paint the planned card onto a canvas in place.

    Args:
        plan: Output of the layout pass
        canvas: RGB image of exactly ``plan.width`` x ``plan.total_height``
        fonts: Font book used for the layout pass
        qr_image: QR inset to composite at the bottom, if any

    Returns:
        The y offset reached after the last block
    """
    if canvas.size != (plan.width, plan.total_height):
        raise CardRenderError(
            f"Canvas is {canvas.size[0]}x{canvas.size[1]}, "
            f"plan needs {plan.width}x{plan.total_height}"
        )

    draw = ImageDraw.Draw(canvas)
    _paint_frame(draw, plan)

    y = float(plan.geometry.top_padding)
    for block in plan.blocks:
        if block.spec.divider:
            _paint_divider(draw, plan, block)

        if block.spec.kind is BlockKind.QR:
            if qr_image is not None:
                y = _paint_qr(canvas, plan, block, qr_image)
            else:
                y = block.end_y
            continue

        y = _paint_text(canvas, plan, block, fonts)

    logger.debug(f"Painted {len(plan.blocks)} blocks down to y={y:.1f}")
    return y

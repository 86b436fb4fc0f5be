"""Fixed geometry of the share card.

Both the layout pass and the paint pass read their numbers from one
``CardGeometry`` instance, never from literals of their own.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CardGeometry:
    """Card dimensions, font sizes and vertical spacing in pixels."""

    width: int = 500
    side_padding: int = 35

    # Font sizes
    title_size: int = 30
    request_size: int = 24
    date_size: int = 16
    luck_size: int = 22
    section_title_size: int = 23
    body_size: int = 19
    summary_size: int = 26

    # Line height multipliers
    request_line_ratio: float = 1.4
    luck_line_ratio: float = 1.35
    body_line_ratio: float = 1.5
    summary_line_ratio: float = 1.4

    # Vertical spacing
    top_padding: int = 40
    space_after_title: int = 20
    space_after_request: int = 20
    space_after_date: int = 18
    space_after_luck: int = 30
    space_after_section_title: int = 15
    space_between_sections: int = 28
    space_before_summary: int = 30
    space_after_summary: int = 30
    space_before_qr: int = 25
    bottom_padding: int = 40

    qr_size: int = 80
    min_height: int = 900

    # Borders
    outer_border_width: int = 7
    inner_border_width: int = 2
    inner_border_inset: int = 10

    # Text is drawn on its alphabetic baseline at size * baseline_ratio
    baseline_ratio: float = 0.75

    @property
    def content_width(self) -> int:
        return self.width - self.side_padding * 2

    @property
    def divider_offset(self) -> float:
        """Distance from a section's top up to its divider rule."""
        return self.space_after_section_title / 2


DEFAULT_GEOMETRY = CardGeometry()

"""Share card composer.

Ties the layout pass, the QR inset and the paint pass together and
serializes the result to PNG and a base64 data URI.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image

from lingqian.card.fonts import FontBook
from lingqian.card.geometry import DEFAULT_GEOMETRY, CardGeometry
from lingqian.card.layout import LayoutPlan, plan_card
from lingqian.card.qr import generate_qr
from lingqian.card.renderer import new_canvas, render_card
from lingqian.core.sign import RenderRequest
from lingqian.errors import CardError, CardRenderError
from lingqian.settings import DEFAULT_QR_URL

logger = logging.getLogger(__name__)

SHARE_ERROR_KEY = "generateShareImageError"
SHARE_ERROR_DEFAULT = "生成分享图片失败，请重试"


@dataclass
class CardImage:
    """A composed card ready for preview or sharing."""

    image: Image.Image
    plan: LayoutPlan
    png: bytes
    sign_id: str

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.png).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    @property
    def size(self):
        return self.image.size


class CardComposer:
    """Composes share cards for sign render requests.

    A composer holds only a font cache between calls. Every call gets a
    fresh canvas, so concurrent calls do not share a drawing surface.
    """

    def __init__(
        self,
        fonts: Optional[FontBook] = None,
        geometry: CardGeometry = DEFAULT_GEOMETRY,
        qr_url: str = DEFAULT_QR_URL,
    ):
        """Initialize the composer.

        Args:
            fonts: Font book for measuring and drawing text
            geometry: Card size and spacing table
            qr_url: URL encoded into every card's QR inset
        """
        self.fonts = fonts or FontBook()
        self.geometry = geometry
        self.qr_url = qr_url

    def plan(self, request: RenderRequest) -> LayoutPlan:
        """Run the layout pass only."""
        return plan_card(request, self.fonts.measure, self.geometry)

    def compose(self, request: RenderRequest) -> CardImage:
        """Compose the card for a request.

        Raises:
            CardError: if any step fails; nothing partial is returned
        """
        try:
            plan = self.plan(request)
            qr_image = generate_qr(self.qr_url, self.geometry.qr_size)
            canvas = new_canvas(plan)
            render_card(plan, canvas, self.fonts, qr_image)

            buffer = BytesIO()
            canvas.save(buffer, format="PNG")
        except CardError:
            raise
        except Exception as exc:
            raise CardRenderError(f"Card render failed: {exc}") from exc

        logger.info(
            f"Composed card for sign {request.sign.id or '?'} "
            f"({plan.width}x{plan.total_height}, {request.language})"
        )
        return CardImage(
            image=canvas,
            plan=plan,
            png=buffer.getvalue(),
            sign_id=request.sign.id,
        )

    async def compose_async(self, request: RenderRequest) -> CardImage:
        """Compose in a worker thread so the event loop stays responsive."""
        return await asyncio.to_thread(self.compose, request)


@dataclass
class ShareResult:
    """Outcome of a share action: a card, or a message for the user."""

    card: Optional[CardImage] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.card is not None


def share_card(composer: CardComposer, request: RenderRequest) -> ShareResult:
    """Compose a card at the UI boundary.

    Failures are logged and turned into the generic localized message;
    the caller shows it and re-enables its share control.
    """
    try:
        return ShareResult(card=composer.compose(request))
    except CardError as exc:
        logger.error(f"Error generating share image: {exc}")
        return ShareResult(
            error_message=request.label(SHARE_ERROR_KEY, SHARE_ERROR_DEFAULT)
        )

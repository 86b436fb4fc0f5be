"""QR code inset for the share card."""

import logging

import qrcode
from PIL import Image

from lingqian.errors import QRGenerationError

logger = logging.getLogger(__name__)

QR_FOREGROUND = "#402E2F"
QR_BACKGROUND = "white"


def generate_qr(url: str, size: int) -> Image.Image:
    """Render a URL as a square QR code bitmap.

    Args:
        url: Payload to encode
        size: Edge length of the returned image in pixels

    Returns:
        RGB image of ``size`` x ``size`` pixels

    Raises:
        QRGenerationError: if encoding or rasterizing fails
    """
    try:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_H,
            box_size=4,
            border=1,
        )
        qr.add_data(url)
        qr.make(fit=True)

        qr_img = qr.make_image(fill_color=QR_FOREGROUND, back_color=QR_BACKGROUND)
        qr_img = qr_img.convert("RGB")
        return qr_img.resize((size, size), Image.Resampling.NEAREST)
    except Exception as exc:
        logger.error(f"Failed to generate QR code: {exc}")
        raise QRGenerationError(f"QR generation failed for {url!r}: {exc}") from exc

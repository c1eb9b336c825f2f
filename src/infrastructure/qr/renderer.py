"""
QR code rendering with the `qrcode` library.

Renders the JSON payload produced by IdentifierGenerator.qr_payload()
to PNG bytes. Decoding scanned images is the scanner's job, not ours.
"""

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from src.config import get_logger, get_settings

logger = get_logger(__name__)


class QRCodeRenderer:
    """PNG renderer for product QR codes."""

    def __init__(
        self,
        box_size: int = 8,
        border: int = 1,
        fill_color: str = "#1E40AF",
        back_color: str = "#FFFFFF",
    ) -> None:
        self.box_size = box_size
        self.border = border
        self.fill_color = fill_color
        self.back_color = back_color

    def render_png(self, payload: str) -> bytes:
        """Encode `payload` and return PNG bytes."""
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color=self.fill_color, back_color=self.back_color)
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        data = buffer.getvalue()

        logger.debug("qr_rendered", payload_length=len(payload), png_bytes=len(data))
        return data


def render_qr_png(payload: str) -> bytes:
    """Render with the configured QR settings."""
    settings = get_settings().qr
    renderer = QRCodeRenderer(
        box_size=settings.box_size,
        border=settings.border,
        fill_color=settings.fill_color,
        back_color=settings.back_color,
    )
    return renderer.render_png(payload)

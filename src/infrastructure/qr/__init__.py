"""QR code rendering."""

from src.infrastructure.qr.renderer import QRCodeRenderer, render_qr_png

__all__ = ["QRCodeRenderer", "render_qr_png"]

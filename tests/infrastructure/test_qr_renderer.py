"""Tests for QR rendering."""

from src.infrastructure.qr import QRCodeRenderer, render_qr_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestQRCodeRenderer:
    def test_renders_png(self):
        data = QRCodeRenderer().render_png('{"qrCode":"PRD-ABC-123","timestamp":1}')
        assert data.startswith(PNG_MAGIC)

    def test_larger_boxes_give_larger_image(self):
        payload = "PRD-ABC-123"
        small = QRCodeRenderer(box_size=2).render_png(payload)
        large = QRCodeRenderer(box_size=20).render_png(payload)
        assert len(large) > len(small)

    def test_configured_renderer(self):
        assert render_qr_png("PRD-ABC-123").startswith(PNG_MAGIC)

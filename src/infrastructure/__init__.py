"""Infrastructure layer implementations."""

from src.infrastructure import qr, storage

__all__ = ["storage", "qr"]

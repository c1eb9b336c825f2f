"""
Product identifier generation and parsing.

Identifiers look like PRD-<base36 millis>-<random suffix>, uppercase,
and are what the product's QR code carries.
"""

from __future__ import annotations

import json
import re
import secrets
import string
import time
from collections.abc import Callable
from typing import Any

IDENTIFIER_PREFIX = "PRD"
IDENTIFIER_PATTERN = re.compile(r"^PRD-[A-Z0-9]+-[A-Z0-9]+$")

DEMO_AUTHENTIC_IDENTIFIER = "PRD-DEMO-AUTHENTIC"
DEMO_COUNTERFEIT_IDENTIFIER = "PRD-DEMO-COUNTERFEIT"

MIN_SUFFIX_LENGTH = 5

_BASE36_ALPHABET = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    """Encode a non-negative integer in uppercase base36."""
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[rem])
    return "".join(reversed(digits))


class IdentifierGenerator:
    """
    Produces globally-unique product identifiers.

    Uniqueness comes from the millisecond timestamp plus a random suffix
    drawn from `secrets`. Collisions are still possible in theory; the
    ledger treats them as retryable.
    """

    def __init__(
        self,
        suffix_length: int = 9,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if suffix_length < MIN_SUFFIX_LENGTH:
            raise ValueError(
                f"suffix_length must be at least {MIN_SUFFIX_LENGTH}, got {suffix_length}"
            )
        self._suffix_length = suffix_length
        self._clock = clock or time.time

    @property
    def suffix_length(self) -> int:
        return self._suffix_length

    def generate(self) -> str:
        """Generate a new identifier."""
        millis = int(self._clock() * 1000)
        suffix = "".join(
            secrets.choice(_BASE36_ALPHABET) for _ in range(self._suffix_length)
        )
        return f"{IDENTIFIER_PREFIX}-{to_base36(millis)}-{suffix}"

    @staticmethod
    def normalize(raw: str) -> str:
        """Trim and case-normalize a presented identifier."""
        return raw.strip().upper()

    @staticmethod
    def is_valid(identifier: str) -> bool:
        """Check the external identifier format."""
        return bool(IDENTIFIER_PATTERN.match(identifier))

    def parse_scan(self, payload: str) -> str | None:
        """
        Extract an identifier from decoded QR content.

        Accepts the JSON payload written by qr_payload() or a bare
        identifier string. JSON without qrCode/timestamp yields None.
        """
        text = payload.strip()
        if not text:
            return None

        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError:
            return self.normalize(text)

        if not isinstance(data, dict):
            return None
        code = data.get("qrCode")
        if not code or not data.get("timestamp"):
            return None
        return self.normalize(str(code))

    def qr_payload(
        self,
        identifier: str,
        manufacturer: str | None = None,
        product_id: int | None = None,
    ) -> str:
        """JSON document encoded into a product's QR code."""
        data: dict[str, Any] = {
            "qrCode": identifier,
            "timestamp": int(self._clock() * 1000),
        }
        if product_id is not None:
            data["productId"] = product_id
        if manufacturer:
            data["manufacturer"] = manufacturer
        return json.dumps(data, separators=(",", ":"))

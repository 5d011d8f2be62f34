"""Correlation identifiers for outbound requests.

Identifiers follow the dashed 8-4-4-4-12 hex layout (e.g.
``3fb17ebc-bc38-4939-bc8b-74f2443281d4``) but are plain tracing tokens:
every hex digit is drawn independently from a seeded PRNG, no version bits
are set and uniqueness is not enforced.
"""

import random
import re

HEX_DIGITS = "0123456789abcdef"
DASH_POSITIONS = (8, 13, 18, 23)
ID_LENGTH = 36

_ID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def is_correlation_id(value: str) -> bool:
    """Check that a string has the correlation identifier layout."""
    return bool(_ID_PATTERN.fullmatch(value))


class CorrelationIdGenerator:
    """Produces per-request correlation identifiers."""

    def __init__(self, seed: int | None = None):
        """Initialize the generator.

        Args:
            seed: Optional seed; defaults to OS entropy
        """
        self._random = random.Random(seed)

    def next(self) -> str:
        chars = [
            "-" if i in DASH_POSITIONS else self._random.choice(HEX_DIGITS)
            for i in range(ID_LENGTH)
        ]
        return "".join(chars)


default_generator = CorrelationIdGenerator()

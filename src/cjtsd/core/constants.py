"""
CJTSD wire constants.

Defines the sentinel and threshold values shared by the encoder and decoder. This
module is zero-IO and uses only the Python standard library.

Notes:
    - ``REUSE_DURATION`` is a wire-level marker only; the public builder API models
      "reuse the previous duration" as ``None``.
    - Changing ``LITERAL_DURATION_LIMIT`` changes the bytes produced by ``build()``
      and therefore the wire compatibility of encoded records.
"""

from __future__ import annotations

from datetime import UTC, datetime

__all__ = [
    "REUSE_DURATION",
    "LITERAL_DURATION_LIMIT",
    "EPOCH",
    "MILLIS_PER_MINUTE",
    "MILLIS_PER_SECOND",
]

# Stored in the duration column in place of a value equal to the last explicit one.
REUSE_DURATION: int = -1

# Durations below this are re-emitted literally instead of as REUSE_DURATION
# ("-1" is two characters, so it only pays off from three digits up).
LITERAL_DURATION_LIMIT: int = 100

# Origin of every timestamp column.
EPOCH: datetime = datetime(1970, 1, 1, tzinfo=UTC)

MILLIS_PER_MINUTE: int = 60 * 1000
MILLIS_PER_SECOND: int = 1000

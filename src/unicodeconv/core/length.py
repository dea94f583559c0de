"""Overflow-safe narrowing of sequence lengths.

Python integers are unbounded, while the transcoding primitive takes its
lengths as a signed 32-bit ``int``.  :func:`safe_length_cast` is the one
place a length can be judged too large.
"""

from __future__ import annotations

import operator

from unicodeconv.exceptions import LengthOverflowError
from unicodeconv.utils.constants import INT32_MAX


def safe_length_cast(length: int, *, limit: int = INT32_MAX) -> int:
    """Return *length* unchanged if it fits into the primitive's ``int``.

    Raises
    ------
    LengthOverflowError
        If *length* exceeds *limit*.
    ValueError
        If *length* is negative.
    TypeError
        If *length* is not an integer.
    """
    length = operator.index(length)
    if length < 0:
        raise ValueError(f"Length must be non-negative, got {length}.")
    if length > limit:
        raise LengthOverflowError(length, limit)
    return length

"""
Byte value frequency table.
"""

from collections import Counter

from .models import HistogramTable, BYTE_VALUES


def compute_histogram(data: bytes) -> HistogramTable:
    """
    Count occurrences of each byte value.

    Args:
        data: Buffer to scan

    Returns:
        HistogramTable with all 256 buckets, zero where a value never occurs
    """
    counter = Counter(data)
    return HistogramTable(tuple(counter.get(value, 0) for value in range(BYTE_VALUES)))

"""
Summaries of numeric fields gathered from collected form records.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from .formula import average, rsd, stdev


@dataclass
class SampleSummary:
    """Descriptive statistics for one sample."""

    count: int
    average: Decimal
    stdev: Optional[Decimal]
    """None for samples with fewer than two values"""

    rsd: Optional[str]
    """None when stdev is None or the mean is zero"""


def field_values(records: Iterable[Mapping[str, Any]], field: str) -> List[Any]:
    """Pull the values of one field out of many DataRecords.

    Records missing the field, or holding an empty string or a checkbox
    boolean for it, are skipped.
    """
    values = []
    for record in records:
        value = record.get(field)
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        values.append(value)
    return values


def summarize(*values) -> SampleSummary:
    """Compute every statistic the sample supports."""
    mean = average(*values)

    deviation = None
    relative = None
    if len(values) >= 2:
        deviation = stdev(*values)
        if mean != 0:
            relative = rsd(*values)

    return SampleSummary(count=len(values), average=mean, stdev=deviation, rsd=relative)

"""
Precision-safe descriptive statistics.
"""

from .formula import Formula, InvalidSampleError, average, rsd, stdev, to_precision
from .deviation import Deviation
from .summary import SampleSummary, field_values, summarize

__all__ = [
    'Formula',
    'InvalidSampleError',
    'average',
    'stdev',
    'rsd',
    'to_precision',
    'Deviation',
    'SampleSummary',
    'field_values',
    'summarize'
]

"""
Records exchanged between form inputs and ScopedStore.
"""

from dataclasses import dataclass
from typing import Dict, Union

# Input types whose values are collected and restored. Action-only and
# sensitive controls (button, file, hidden, image, password, reset, submit)
# are absent.
ALLOWED_INPUT_TYPES = frozenset([
    "checkbox",
    "color",
    "date",
    "datetime-local",
    "email",
    "month",
    "number",
    "radio",
    "range",
    "search",
    "tel",
    "text",
    "time",
    "url",
    "week",
])

FieldValue = Union[str, bool, int]
DataRecord = Dict[str, FieldValue]


@dataclass
class InputRecord:
    """Mutable stand-in for a form control."""

    type: str
    name: str
    value: str = ""
    checked: bool = False

"""
Validation models for records crossing the storage boundary.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator, model_validator


class InputRecordPayload(BaseModel):
    type: str
    name: str
    value: Optional[str] = ""
    checked: bool = False

    @field_validator('type')
    @classmethod
    def type_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('type cannot be empty')
        # Browsers report input types in lower case
        return v.strip().lower()

    @field_validator('value')
    @classmethod
    def value_defaults_to_empty(cls, v):
        return "" if v is None else v


class DataRecordModel(BaseModel):
    """A collected form record: a timestamp plus string/boolean fields."""

    model_config = ConfigDict(extra='allow')

    timestamp: StrictInt

    @field_validator('timestamp')
    @classmethod
    def timestamp_must_not_be_negative(cls, v):
        if v < 0:
            raise ValueError('timestamp must be epoch milliseconds')
        return v

    @model_validator(mode='after')
    def fields_must_be_str_or_bool(self):
        for name, value in (self.model_extra or {}).items():
            if not isinstance(value, (str, bool)):
                raise ValueError(f"field '{name}' must be a string or boolean")
        return self

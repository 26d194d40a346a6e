"""
Serialization of DataRecords and helpers for saving whole forms.

ScopedStore only stores strings; these helpers pick JSON as the wire format
and validate what comes back out of storage.
"""

import json
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from . import config
from .schema import DataRecord, InputRecord
from .scoped_store import ScopedStore
from ..api.schemas import DataRecordModel, InputRecordPayload
from ..util.logging import logger


def dump_record(record: DataRecord) -> str:
    """Serialize a DataRecord to JSON text."""
    return json.dumps(record, ensure_ascii=False)


def load_record(text: str) -> DataRecord:
    """Parse JSON text produced by dump_record back into a DataRecord."""
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Stored record is not valid JSON: {e}")
        raise ValueError(f"stored record is not valid JSON: {e}") from e

    if not isinstance(record, dict):
        raise ValueError(f"stored record must be a JSON object, got {type(record).__name__}")

    if config.SCHEMA_VALIDATION_STRICT:
        try:
            DataRecordModel.model_validate(record)
        except ValidationError as e:
            logger.error(f"Schema validation failed for stored record: {e}")
            raise

    return record


def parse_inputs(payloads: Iterable[Mapping[str, Any]]) -> List[InputRecord]:
    """Build InputRecords from plain mappings such as decoded JSON."""
    inputs = []
    for payload in payloads:
        model = InputRecordPayload.model_validate(payload)
        inputs.append(InputRecord(**model.model_dump()))
    return inputs


def save_form(store: ScopedStore, record_id: str, inputs: Iterable[Any],
              collect_empty_value: bool = True) -> Optional[DataRecord]:
    """Collect inputs and persist the record under record_id.

    Returns the stored record, or None when there was nothing to collect
    (in which case nothing is written). Under strict validation a record
    holding non-string, non-boolean values raises ValidationError and is
    not written.
    """
    record = store.collect_data(inputs, collect_empty_value)
    if record is None:
        return None

    # Refuse to write anything load_record would later reject
    if config.SCHEMA_VALIDATION_STRICT:
        try:
            DataRecordModel.model_validate(record)
        except ValidationError as e:
            logger.error(f"Schema validation failed for form '{record_id}' in scope '{store.scope}': {e}")
            raise

    store.write(record_id, dump_record(record))
    return record


def restore_form(store: ScopedStore, record_id: str, inputs: Iterable[Any]) -> bool:
    """Load record_id and write it back onto inputs. False if it is absent."""
    text = store.read(record_id)
    if text is None:
        return False

    store.export_data(load_record(text), inputs)
    return True

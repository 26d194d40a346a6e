"""
Scoped key/value persistence and form-input collection.

Every key a ScopedStore touches lives at ``<scope>/<id>`` in a shared
backing store, so several logical datasets can coexist without clashing.
The store also converts a collection of form inputs into a plain
DataRecord (collect_data) and writes such a record back onto inputs
(export_data). Serializing the record is left to the caller, see
formvault.core.records.
"""

import time
from numbers import Number
from typing import Any, Iterable, List, Optional

from .config import get_backing_store
from .schema import ALLOWED_INPUT_TYPES, DataRecord
from .storage import IKeyValueStore
from ..util.logging import logger

SCOPE_SEPARATOR = "/"


def _safe_key(name: str) -> str:
    """Translate an input name into a record field name."""
    return name.replace("-", "_")


def _is_allowed_type(input_type: str) -> bool:
    return input_type in ALLOWED_INPUT_TYPES


def _array_string(value: Any) -> str:
    """Render a value the way a browser joins array elements."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_array_string(item) for item in value)
    return str(value)


def _is_loosely_empty(value: Any) -> bool:
    """Mirror a browser's ``value == ''`` comparison.

    Besides None and the empty string, ``false`` and numeric zero compare
    equal to ``''`` under loose equality. Lists and tuples are joined into a
    string first, so ``[]``, ``[""]``, ``[None]`` and ``[[]]`` are empty
    while ``["", ""]`` (``","``) and ``[0]`` (``"0"``) are not.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (bool, Number)):
        return value == 0
    if isinstance(value, (list, tuple)):
        return _array_string(value) == ""
    return False


def _should_collect(value: Any, collect_empty_value: bool) -> bool:
    return collect_empty_value or not _is_loosely_empty(value)


class ScopedStore:
    """Key/value access and form round-tripping confined to one scope."""

    def __init__(self, scope: str, store: IKeyValueStore = None):
        if not scope:
            raise ValueError("scope cannot be empty")
        if SCOPE_SEPARATOR in scope:
            raise ValueError(f"scope cannot contain '{SCOPE_SEPARATOR}': {scope!r}")

        self.scope = scope
        self._store = store if store is not None else get_backing_store()

    def _key(self, record_id: str) -> str:
        return f"{self.scope}{SCOPE_SEPARATOR}{record_id}"

    def read(self, record_id: str) -> Optional[str]:
        """Return the raw value stored for record_id, or None."""
        value = self._store.get_item(self._key(record_id))
        logger.log_store_operation("read", self.scope, record_id,
                                   status="hit" if value is not None else "miss")
        return value

    def write(self, record_id: str, data: str) -> None:
        """Store already-serialized data under record_id, overwriting silently."""
        if not isinstance(data, str):
            raise TypeError(
                f"ScopedStore.write expects serialized str data, got {type(data).__name__}"
            )

        self._store.set_item(self._key(record_id), data)
        logger.log_store_operation("write", self.scope, record_id, value=data)

    def remove(self, record_id: str) -> None:
        """Delete record_id. Removing a missing id is a no-op."""
        self._store.remove_item(self._key(record_id))
        logger.log_store_operation("remove", self.scope, record_id)

    def list_keys(self) -> List[str]:
        """List the ids stored under this scope."""
        prefix = self.scope + SCOPE_SEPARATOR
        ids = []
        for key in self._store.keys():
            if key.startswith(prefix):
                # The scope boundary is the first separator in the full key
                ids.append(key[key.index(SCOPE_SEPARATOR) + 1:])

        logger.log_store_operation("list_keys", self.scope, status=f"{len(ids)} ids")
        return ids

    def collect_data(self, inputs: Iterable[Any],
                     collect_empty_value: bool = True) -> Optional[DataRecord]:
        """Build a DataRecord from form inputs.

        Returns None when ``inputs`` is empty, so "nothing to collect" stays
        distinguishable from a record that only carries a timestamp.

        Checkboxes always contribute their checked state. A radio group
        contributes the value of its checked member; when several members are
        checked the last one wins. Every other allowed type contributes its
        value unless it is empty and ``collect_empty_value`` is False.
        """
        inputs = list(inputs)
        if len(inputs) == 0:
            return None

        result: DataRecord = {"timestamp": int(time.time() * 1000)}

        for field in inputs:
            if not _is_allowed_type(field.type):
                continue

            if field.type == "checkbox":
                result[_safe_key(field.name)] = bool(field.checked)
            elif field.type == "radio":
                if field.checked:
                    result[_safe_key(field.name)] = field.value
            elif _should_collect(field.value, collect_empty_value):
                result[_safe_key(field.name)] = field.value

        logger.log_form_operation("collect", self.scope, len(result) - 1, len(inputs))
        return result

    def export_data(self, data: DataRecord, inputs: Iterable[Any]) -> None:
        """Write the values of data back onto matching inputs, in place.

        Every input whose safe name matches a field is updated, not only the
        first one. Fields without a matching input are ignored, and so are
        inputs whose type is not collectable.
        """
        inputs = list(inputs)
        updated = 0

        for item, value in data.items():
            for field in inputs:
                if _safe_key(field.name) != item or not _is_allowed_type(field.type):
                    continue

                if field.type == "checkbox":
                    field.checked = bool(value)
                elif field.type == "radio":
                    if field.value != value:
                        continue
                    field.checked = True
                else:
                    field.value = value
                updated += 1

        logger.log_form_operation("export", self.scope, len(data), updated)

"""
collect_data / export_data tests: input type rules, safe keys and round trips.
"""

import copy
import logging
from unittest.mock import patch

import pytest

from formvault.core.schema import ALLOWED_INPUT_TYPES, InputRecord
from formvault.core.scoped_store import ScopedStore
from formvault.core.storage import InMemoryKeyValueStore

FIXED_NOW = 1700000000.5


@pytest.fixture
def store():
    return ScopedStore("survey", InMemoryKeyValueStore())


@pytest.fixture
def form_inputs():
    """A representative form with every kind of control."""
    return [
        InputRecord(type="text", name="first-name", value="Ada"),
        InputRecord(type="email", name="email", value="ada@example.com"),
        InputRecord(type="number", name="sample-mass", value="12.5"),
        InputRecord(type="checkbox", name="agree", checked=True),
        InputRecord(type="checkbox", name="newsletter", checked=False),
        InputRecord(type="radio", name="color", value="red"),
        InputRecord(type="radio", name="color", value="blue", checked=True),
        InputRecord(type="date", name="run-date", value="2024-05-01"),
        InputRecord(type="password", name="secret", value="hunter2"),
        InputRecord(type="hidden", name="csrf", value="token"),
        InputRecord(type="submit", name="go", value="Send"),
    ]


def _reset(inputs):
    """Copy inputs as a freshly loaded form: nothing typed, nothing checked."""
    blank = copy.deepcopy(inputs)
    for field in blank:
        if field.type in ("checkbox", "radio"):
            field.checked = False
        else:
            field.value = ""
    return blank


class TestCollectData:
    """Test building DataRecords from inputs."""

    def test_empty_inputs_return_none(self, store):
        """No inputs means no record, not an empty record."""
        assert store.collect_data([]) is None
        assert store.collect_data(iter([])) is None

    def test_only_disallowed_inputs_still_yield_record(self, store):
        """Non-empty input with nothing collectable yields a bare timestamp record."""
        with patch("formvault.core.scoped_store.time") as mock_time:
            mock_time.time.return_value = FIXED_NOW
            record = store.collect_data([InputRecord(type="button", name="b", value="x")])
        assert record == {"timestamp": 1700000000500}

    def test_checkbox_checked(self, store):
        """A checked checkbox yields True."""
        with patch("formvault.core.scoped_store.time") as mock_time:
            mock_time.time.return_value = FIXED_NOW
            record = store.collect_data([InputRecord(type="checkbox", name="agree", checked=True)])
        assert record == {"timestamp": 1700000000500, "agree": True}

    def test_checkbox_unchecked_always_included(self, store):
        """Unchecked checkboxes are recorded as False even when empties are skipped."""
        record = store.collect_data(
            [InputRecord(type="checkbox", name="agree", value="")],
            collect_empty_value=False
        )
        assert record["agree"] is False

    def test_radio_group_takes_checked_value(self, store):
        """Only the checked radio contributes its value."""
        record = store.collect_data([
            InputRecord(type="radio", name="color", value="red"),
            InputRecord(type="radio", name="color", value="blue", checked=True),
        ])
        assert record["color"] == "blue"

    def test_radio_group_none_checked_absent(self, store):
        """An unanswered radio group leaves no field."""
        record = store.collect_data([
            InputRecord(type="radio", name="color", value="red"),
            InputRecord(type="radio", name="color", value="blue"),
        ])
        assert "color" not in record

    def test_radio_last_checked_wins(self, store):
        """With several checked radios the last one in order wins."""
        record = store.collect_data([
            InputRecord(type="radio", name="color", value="red", checked=True),
            InputRecord(type="radio", name="color", value="blue", checked=True),
        ])
        assert record["color"] == "blue"

    def test_safe_keys(self, store):
        """Hyphens in names become underscores."""
        record = store.collect_data([InputRecord(type="text", name="first-name-x", value="Ada")])
        assert record["first_name_x"] == "Ada"
        assert "first-name-x" not in record

    def test_empty_text_with_collect_empty_false(self, store):
        """Empty values are dropped when empties are not wanted."""
        record = store.collect_data(
            [InputRecord(type="text", name="first-name", value="")],
            collect_empty_value=False
        )
        assert "first_name" not in record

    def test_empty_text_with_collect_empty_true(self, store):
        """Empty values are kept by default."""
        record = store.collect_data([InputRecord(type="text", name="first-name", value="")])
        assert record["first_name"] == ""

    @pytest.mark.parametrize("value,kept", [
        (None, False),
        ("", False),
        (False, False),
        (0, False),
        (0.0, False),
        ([], False),
        ([""], False),
        ([None], False),
        ([[]], False),
        (("",), False),
        (["", ""], True),
        ([0], True),
        (["a"], True),
        (" ", True),
        ("0", True),
        ("false", True),
        (7, True),
    ])
    def test_loose_emptiness(self, store, value, kept):
        """Emptiness follows loose comparison against the empty string."""
        record = store.collect_data(
            [InputRecord(type="text", name="field", value=value)],
            collect_empty_value=False
        )
        assert ("field" in record) is kept

    @pytest.mark.parametrize("input_type", ["button", "file", "hidden", "image", "password", "reset", "submit"])
    def test_disallowed_types_skipped(self, store, input_type):
        """Action-only and sensitive controls are never read."""
        record = store.collect_data([InputRecord(type=input_type, name="field", value="x", checked=True)])
        assert "field" not in record

    @pytest.mark.parametrize("input_type", sorted(ALLOWED_INPUT_TYPES - {"checkbox", "radio"}))
    def test_allowed_value_types_collected(self, store, input_type):
        """Every other allow-listed type contributes its value."""
        record = store.collect_data([InputRecord(type=input_type, name="field", value="v")])
        assert record["field"] == "v"

    def test_full_form(self, store, form_inputs):
        """A mixed form produces the expected record in input order."""
        with patch("formvault.core.scoped_store.time") as mock_time:
            mock_time.time.return_value = FIXED_NOW
            record = store.collect_data(form_inputs)

        assert list(record.items()) == [
            ("timestamp", 1700000000500),
            ("first_name", "Ada"),
            ("email", "ada@example.com"),
            ("sample_mass", "12.5"),
            ("agree", True),
            ("newsletter", False),
            ("color", "blue"),
            ("run_date", "2024-05-01"),
        ]

    def test_each_call_is_a_fresh_record(self, store, form_inputs):
        """Records are never reused between calls."""
        with patch("formvault.core.scoped_store.time") as mock_time:
            mock_time.time.side_effect = [1.0, 2.0]
            first = store.collect_data(form_inputs)
            second = store.collect_data(form_inputs)

        assert first is not second
        assert first["timestamp"] == 1000
        assert second["timestamp"] == 2000

    def test_duck_typed_inputs(self, store):
        """Any object with type/name/value/checked attributes works."""

        class Control:
            def __init__(self, type, name, value="", checked=False):
                self.type = type
                self.name = name
                self.value = value
                self.checked = checked

        record = store.collect_data([Control("tel", "phone-no", "555")])
        assert record["phone_no"] == "555"

    def test_collect_is_logged(self, store, form_inputs, caplog):
        caplog.set_level(logging.DEBUG, logger="formvault")
        store.collect_data(form_inputs)
        assert any("Operation: form.collect" in r.getMessage() for r in caplog.records)


class TestExportData:
    """Test writing DataRecords back onto inputs."""

    def test_text_value_written(self, store):
        inputs = [InputRecord(type="text", name="first-name")]
        store.export_data({"first_name": "Ada"}, inputs)
        assert inputs[0].value == "Ada"

    def test_checkbox_state_written(self, store):
        inputs = [
            InputRecord(type="checkbox", name="agree"),
            InputRecord(type="checkbox", name="spam", checked=True),
        ]
        store.export_data({"agree": True, "spam": False}, inputs)
        assert inputs[0].checked is True
        assert inputs[1].checked is False

    def test_radio_checks_matching_value_only(self, store):
        """Only the radio with the stored value becomes checked."""
        inputs = [
            InputRecord(type="radio", name="color", value="red"),
            InputRecord(type="radio", name="color", value="blue"),
        ]
        store.export_data({"color": "blue"}, inputs)
        assert [i.checked for i in inputs] == [False, True]

    def test_radio_does_not_uncheck_others(self, store):
        """Export only ever sets checked on the match."""
        inputs = [
            InputRecord(type="radio", name="color", value="red", checked=True),
            InputRecord(type="radio", name="color", value="blue"),
        ]
        store.export_data({"color": "blue"}, inputs)
        assert [i.checked for i in inputs] == [True, True]

    def test_all_same_named_inputs_updated(self, store):
        """Duplicate names are all written, not just the first."""
        inputs = [
            InputRecord(type="text", name="note"),
            InputRecord(type="search", name="note"),
        ]
        store.export_data({"note": "hello"}, inputs)
        assert [i.value for i in inputs] == ["hello", "hello"]

    def test_unmatched_fields_ignored(self, store):
        """Fields without inputs and inputs without fields are left alone."""
        inputs = [InputRecord(type="text", name="kept", value="original")]
        store.export_data({"timestamp": 1, "other": "x"}, inputs)
        assert inputs[0].value == "original"

    def test_disallowed_types_not_written(self, store):
        """Controls outside the allow-list are never written."""
        inputs = [
            InputRecord(type="password", name="secret", value="old"),
            InputRecord(type="hidden", name="secret", value="old"),
        ]
        store.export_data({"secret": "new"}, inputs)
        assert [i.value for i in inputs] == ["old", "old"]

    def test_hyphenated_names_match_safe_keys(self, store):
        inputs = [InputRecord(type="number", name="sample-mass")]
        store.export_data({"sample_mass": "3.2"}, inputs)
        assert inputs[0].value == "3.2"


def test_collect_export_round_trip(store, form_inputs):
    """Exporting a collected record onto a blank copy restores the form."""
    record = store.collect_data(form_inputs)
    restored = _reset(form_inputs)

    store.export_data(record, restored)

    for original, copy_ in zip(form_inputs, restored):
        if original.type not in ALLOWED_INPUT_TYPES:
            continue
        if original.type in ("checkbox", "radio"):
            assert copy_.checked == original.checked, original.name
        else:
            assert copy_.value == original.value, original.name


def test_round_trip_with_empty_values(store):
    """Empty values survive a round trip when collected."""
    inputs = [
        InputRecord(type="text", name="comment", value=""),
        InputRecord(type="url", name="site", value="https://example.com"),
    ]
    record = store.collect_data(inputs)
    restored = [InputRecord(type="text", name="comment", value="stale"), InputRecord(type="url", name="site")]

    store.export_data(record, restored)

    assert restored[0].value == ""
    assert restored[1].value == "https://example.com"

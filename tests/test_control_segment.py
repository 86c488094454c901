"""Tests for the MSH control segment."""

from datetime import datetime

import numpy as np
import pytest

from hl7wire.common.constants import HeaderField
from hl7wire.common.schemas import DelimiterConfig
from hl7wire.model.control import ControlSegment
from hl7wire.model.fields import ComponentList

FIXED_TIME = datetime(2025, 1, 2, 3, 4, 5)


def _make_header(**kwargs: object) -> ControlSegment:
    return ControlSegment([], clock=lambda: FIXED_TIME, rng=np.random.RandomState(42), **kwargs)


# ── Construction tests ──


class TestControlSegmentDefaults:
    def test_bare_segment(self) -> None:
        msh = ControlSegment()
        assert msh.name == "MSH"
        assert msh.size() == 0

    def test_defaults_populated(self) -> None:
        msh = _make_header()
        assert msh.get_field(1) == "|"
        assert msh.get_field(2) == "^~\\&"
        assert msh.get_field(7) == "20250102030405"
        assert msh.get_field(12) == "2.3"

    def test_control_id_from_timestamp_and_random_suffix(self) -> None:
        control_id = _make_header().get_message_control_id().text
        assert control_id.startswith("20250102030405")
        assert 10000 <= int(control_id[14:]) <= 99999

    def test_control_id_deterministic_with_seeded_rng(self) -> None:
        assert _make_header().get_message_control_id() == _make_header().get_message_control_id()

    def test_defaults_with_system_clock(self) -> None:
        msh = ControlSegment([])
        assert len(msh.get_date_time_of_message().text) == 14
        assert msh.get_version_id() == "2.3"

    def test_config_characters_and_version(self) -> None:
        config = DelimiterConfig(field_separator="*", component_separator="!", hl7_version="2.5")
        msh = _make_header(config=config)
        assert msh.get_field(1) == "*"
        assert msh.get_field(2) == "!~\\&"
        assert msh.get_field(12) == "2.5"

    def test_supplied_fields_kept_and_delimiters_overwritten(self) -> None:
        msh = ControlSegment(["#", "abcd", "APP"], clock=lambda: FIXED_TIME)
        assert msh.get_field(1) == "|"
        assert msh.get_field(2) == "^~\\&"
        assert msh.get_sending_application() == "APP"

    def test_from_fields_skips_defaults(self) -> None:
        msh = ControlSegment.from_fields(["|", "^~\\&", "APP"])
        assert msh.size() == 3
        assert msh.get_field(7) is None
        assert msh.field_separator == "|"
        assert msh.encoding_characters == "^~\\&"


# ── Delimiter field validation tests ──


class TestControlSegmentValidation:
    def test_field_separator_must_be_single_character(self) -> None:
        msh = ControlSegment()
        assert msh.set_field(1, "||") is False
        assert msh.get_field(1) is None
        assert msh.set_field(1, "#") is True
        assert msh.get_field(1) == "#"

    def test_encoding_characters_must_be_four(self) -> None:
        msh = ControlSegment()
        assert msh.set_field(2, "abc") is False
        assert msh.set_field(2, "abcde") is False
        assert msh.set_field(2, "abcd") is True

    def test_encoding_characters_must_be_text(self) -> None:
        assert ControlSegment().set_field(2, ["a", "b", "c", "d"]) is False

    def test_rejected_set_keeps_previous_value(self) -> None:
        msh = _make_header()
        msh.set_field(1, "ab")
        assert msh.get_field(1) == "|"

    def test_other_positions_unconstrained(self) -> None:
        msh = ControlSegment()
        assert msh.set_field(3, "ANY LENGTH") is True


# ── Named accessor tests ──


class TestControlSegmentAccessors:
    @pytest.mark.parametrize(
        ("name", "position"),
        [
            ("sending_application", HeaderField.SENDING_APPLICATION),
            ("sending_facility", HeaderField.SENDING_FACILITY),
            ("receiving_application", HeaderField.RECEIVING_APPLICATION),
            ("receiving_facility", HeaderField.RECEIVING_FACILITY),
            ("date_time_of_message", HeaderField.DATE_TIME_OF_MESSAGE),
            ("security", HeaderField.SECURITY),
            ("message_control_id", HeaderField.MESSAGE_CONTROL_ID),
            ("processing_id", HeaderField.PROCESSING_ID),
            ("version_id", HeaderField.VERSION_ID),
            ("sequence_number", HeaderField.SEQUENCE_NUMBER),
            ("continuation_pointer", HeaderField.CONTINUATION_POINTER),
            ("accept_acknowledgment_type", HeaderField.ACCEPT_ACKNOWLEDGMENT_TYPE),
            ("application_acknowledgment_type", HeaderField.APPLICATION_ACKNOWLEDGMENT_TYPE),
            ("country_code", HeaderField.COUNTRY_CODE),
            ("character_set", HeaderField.CHARACTER_SET),
            ("principal_language", HeaderField.PRINCIPAL_LANGUAGE),
        ],
    )
    def test_set_and_get_by_position(self, name: str, position: int) -> None:
        msh = ControlSegment()
        assert getattr(msh, f"set_{name}")("VALUE") is True
        assert msh.get_field(position) == "VALUE"
        assert getattr(msh, f"get_{name}")() == "VALUE"

    def test_message_type_then_trigger_event(self) -> None:
        msh = ControlSegment()
        msh.set_message_type("ADT")
        assert msh.get_message_type() == "ADT"
        assert msh.get_trigger_event() is None
        msh.set_trigger_event("A01")
        assert isinstance(msh.get_field(9), ComponentList)
        assert msh.get_field(9) == ["ADT", "A01"]
        assert msh.get_trigger_event() == "A01"

    def test_message_type_keeps_trigger_event(self) -> None:
        msh = ControlSegment.from_fields(["|", "^~\\&", "", "", "", "", "", "", ["ADT", "A01"]])
        msh.set_message_type("ORU")
        assert msh.get_field(9) == ["ORU", "A01"]

    def test_trigger_event_keeps_message_type(self) -> None:
        msh = ControlSegment.from_fields(["|", "^~\\&", "", "", "", "", "", "", ["ADT", "A01"]])
        msh.set_trigger_event("A04")
        assert msh.get_field(9) == ["ADT", "A04"]

    def test_trigger_event_without_message_type(self) -> None:
        msh = ControlSegment()
        msh.set_trigger_event("A04")
        assert msh.get_field(9) == ["", "A04"]
        msh.set_message_type("ADT")
        assert msh.get_field(9) == ["ADT", "A04"]

"""Unit tests for the Event record.

WHY: Every stage reads and writes Events. Wrong derived attributes
(continuation detection, content) or wrong composition (combine vs
absorb) silently corrupt every output.

HOW: Tests cover construction validation, derived attributes, both
composition methods, and record conversion used by the decoders.

RULES:
- Events are immutable; composition never mutates operands
"""

import dataclasses

import pytest

from transcript_transform.core.ir import Event


class TestConstruction:
    """Times are validated on construction."""

    def test_valid_event(self):
        event = Event(100, 250, " Hi")
        assert (event.start, event.end, event.text) == (100, 250, " Hi")

    def test_zero_length_event_allowed(self):
        assert Event(5, 5, "").duration == 0

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            Event(200, 100, " x")

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            Event(-1, 100, " x")

    def test_frozen(self):
        event = Event(0, 1, " a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.text = " b"


class TestDerivedAttributes:
    """duration, content, and is_continuation."""

    def test_duration(self):
        assert Event(1200, 1750, " x").duration == 550

    def test_content_strips_both_ends(self):
        assert Event(0, 1, "  Hello there \n").content == "Hello there"

    def test_text_is_not_trimmed(self):
        assert Event(0, 1, " Hello ").text == " Hello "

    def test_leading_space_is_not_continuation(self):
        assert not Event(0, 1, " word").is_continuation

    def test_leading_tab_is_not_continuation(self):
        assert not Event(0, 1, "\tword").is_continuation

    def test_no_leading_space_is_continuation(self):
        assert Event(0, 1, "tastic").is_continuation

    def test_punctuation_is_continuation(self):
        assert Event(0, 1, ".").is_continuation

    def test_empty_text_is_not_continuation(self):
        assert not Event(0, 1, "").is_continuation


class TestComposition:
    """combine spans both operands; absorb keeps the left time range."""

    def test_combine(self):
        merged = Event(0, 100, " Hello").combine(Event(300, 450, " world"))
        assert merged == Event(0, 450, " Hello world")

    def test_absorb(self):
        merged = Event(0, 100, " fan").absorb(Event(100, 400, "tastic"))
        assert merged == Event(0, 100, " fantastic")

    def test_no_separator_inserted(self):
        merged = Event(0, 1, "a").combine(Event(1, 2, "b"))
        assert merged.text == "ab"

    def test_operands_unchanged(self):
        left = Event(0, 100, " a")
        right = Event(100, 200, " b")
        left.combine(right)
        left.absorb(right)
        assert left == Event(0, 100, " a")
        assert right == Event(100, 200, " b")


class TestRecords:
    """from_record / to_record used by decoders and the JSON formatter."""

    def test_from_record_with_ints(self):
        assert Event.from_record({"start": 1, "end": 2, "text": " a"}) == Event(1, 2, " a")

    def test_from_record_with_digit_strings(self):
        assert Event.from_record({"start": "10", "end": "20", "text": " a"}) == Event(10, 20, " a")

    def test_from_record_ignores_extra_keys(self):
        record = {"start": 1, "end": 2, "text": " a", "speaker": "1"}
        assert Event.from_record(record) == Event(1, 2, " a")

    def test_from_record_missing_field(self):
        with pytest.raises(KeyError):
            Event.from_record({"start": 1, "text": " a"})

    @pytest.mark.parametrize("bad", ["1.5", "-3", "abc", "", " "])
    def test_from_record_rejects_non_integer_strings(self, bad):
        with pytest.raises(ValueError):
            Event.from_record({"start": bad, "end": "5", "text": " a"})

    @pytest.mark.parametrize("bad", [1.5, True, None])
    def test_from_record_rejects_non_integer_values(self, bad):
        with pytest.raises(TypeError):
            Event.from_record({"start": bad, "end": 5, "text": " a"})

    def test_from_record_rejects_non_string_text(self):
        with pytest.raises(TypeError):
            Event.from_record({"start": 1, "end": 2, "text": 3})

    def test_from_record_rejects_inverted_times(self):
        with pytest.raises(ValueError):
            Event.from_record({"start": 9, "end": 2, "text": " a"})

    def test_to_record(self):
        assert Event(1, 2, " a").to_record() == {"start": 1, "end": 2, "text": " a"}

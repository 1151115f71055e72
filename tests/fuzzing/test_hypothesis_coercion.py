"""
Hypothesis-based property tests for the coercion layer.

Properties checked:
- Unit suffixes: "<n><unit>" is n * multiplier, or Overflow past int64
- Base-10 integer text converts to the same int for every width it fits
- Sequence coercion preserves length and order
- Durations survive format -> parse unchanged
- Text destinations accept any scalar value
"""

from datetime import timedelta
from typing import Annotated

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from binder_kernel.coercion.scalar import ValueCoercer, format_value
from binder_kernel.coercion.sequence import CollectionCoercer
from binder_kernel.domain.durations import format_duration, parse_duration
from binder_kernel.domain.numeric import int_bounds
from binder_kernel.domain.type_kinds import Width
from binder_kernel.domain.units import UNIT_MULTIPLIERS, parse_unit_suffixed
from binder_kernel.exceptions import NumericOverflowError, ValueParseError

INT64_MIN, INT64_MAX = int_bounds(64, True)

unit_letters = st.sampled_from(sorted(UNIT_MULTIPLIERS) + [u.lower() for u in UNIT_MULTIPLIERS])
widths = st.sampled_from([(8, True), (16, True), (32, True), (64, True),
                          (8, False), (16, False), (32, False), (64, False)])


class TestUnitSuffixProperties:
    @pytest.mark.slow
    @given(n=st.integers(min_value=-(2**60), max_value=2**60), unit=unit_letters)
    @settings(max_examples=300)
    def test_integer_prefix_scales_exactly(self, n, unit):
        text = f"{n}{unit}"
        expected = n * UNIT_MULTIPLIERS[unit.upper()]
        fallback = ValueParseError(text, "int64")
        if INT64_MIN <= expected <= INT64_MAX:
            assert parse_unit_suffixed(text, fallback) == expected
        else:
            with pytest.raises(NumericOverflowError):
                parse_unit_suffixed(text, fallback)

    @given(n=st.integers(min_value=-(2**40), max_value=2**40))
    def test_no_unit_letter_reraises_fallback(self, n):
        fallback = ValueParseError(f"{n}x", "int64")
        with pytest.raises(ValueParseError) as exc_info:
            parse_unit_suffixed(f"{n}x", fallback)
        assert exc_info.value is fallback


class TestIntegerTextProperties:
    @given(data=st.data(), width=widths)
    def test_in_range_literal_round_trips(self, data, width):
        bits, signed = width
        low, high = int_bounds(bits, signed)
        n = data.draw(st.integers(min_value=low, max_value=high))
        declared = Annotated[int, Width(bits, signed)]
        assert ValueCoercer().coerce(str(n), declared) == n

    @given(data=st.data(), width=widths)
    def test_out_of_range_literal_overflows(self, data, width):
        bits, signed = width
        low, high = int_bounds(bits, signed)
        n = data.draw(st.integers(min_value=high + 1, max_value=high + 2**20))
        declared = Annotated[int, Width(bits, signed)]
        with pytest.raises(NumericOverflowError):
            ValueCoercer().coerce(str(n), declared)


class TestSequenceProperties:
    @given(values=st.lists(st.integers(min_value=INT64_MIN, max_value=INT64_MAX)))
    def test_length_and_order_preserved(self, values):
        result = CollectionCoercer().coerce_sequence([str(v) for v in values], list[int])
        assert result == values

    @given(values=st.lists(st.one_of(st.integers(), st.booleans(), st.text()), min_size=1))
    def test_text_elements_never_fail(self, values):
        result = CollectionCoercer().coerce_sequence(values, list[str])
        assert len(result) == len(values)
        assert all(isinstance(item, str) for item in result)


class TestDurationProperties:
    @pytest.mark.slow
    @given(
        value=st.timedeltas(
            min_value=timedelta(days=-100_000), max_value=timedelta(days=100_000)
        )
    )
    @settings(max_examples=300)
    def test_format_then_parse(self, value):
        assert parse_duration(format_duration(value)) == value


class TestTextDestination:
    @given(value=st.one_of(st.integers(), st.floats(), st.booleans(), st.text()))
    def test_any_scalar_formats(self, value):
        assert ValueCoercer().coerce(value, str) == format_value(value)

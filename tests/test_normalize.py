"""Tests for identifier and coordinate normalization."""

import math

import pytest

from delhi_bus_tracker.domain.normalize import normalize_key, safe_float


class TestNormalizeKey:
    """Tests for normalize_key."""

    @pytest.mark.parametrize("value", [534, 534.0, "534", " 534 ", b"534"])
    def test_when_route_id_is_numeric_or_text_then_normalizes_to_same_string(
        self, value: object
    ) -> None:
        """Given 534 in several encodings, when normalizing, then all become '534'."""
        assert normalize_key(value) == "534"

    def test_when_value_has_fraction_then_keeps_fraction(self) -> None:
        """Given a non-integral float, when normalizing, then keeps its decimal form."""
        assert normalize_key(12.5) == "12.5"

    @pytest.mark.parametrize("value", [None, "", "   ", True, math.nan, math.inf, object()])
    def test_when_value_is_unusable_then_returns_none(self, value: object) -> None:
        """Given blank, boolean, non-finite or unsupported values, when normalizing, then returns None."""
        assert normalize_key(value) is None

    def test_when_id_has_leading_zeros_then_keeps_them(self) -> None:
        """Given a textual id with leading zeros, when normalizing, then it is not treated as a number."""
        assert normalize_key("0534") == "0534"


class TestSafeFloat:
    """Tests for safe_float."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(28.61, 28.61), (28, 28.0), ("77.2", 77.2), (" 28.5 ", 28.5)],
    )
    def test_when_value_is_numeric_then_returns_float(
        self, value: object, expected: float
    ) -> None:
        """Given numeric values or numeric strings, when coercing, then returns the float."""
        assert safe_float(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value", [None, "", "north", math.nan, -math.inf, "nan", True, [1.0], {"lat": 1}]
    )
    def test_when_value_is_not_a_finite_number_then_returns_none(self, value: object) -> None:
        """Given missing, garbage or non-finite values, when coercing, then returns None."""
        assert safe_float(value) is None

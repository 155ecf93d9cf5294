"""
Тесты для модуля Quantize

Проверяет:
1. decimal_places: оценка числа знаков после запятой
2. to_scaled_int: квантование по режимам, half-up epsilon, переполнение
3. safe_to_scaled_int: деградация scale вместо переполнения
4. from_scaled_int / ScaledDecimal: обратное преобразование
"""

import logging
import math
from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Decimal

import pytest

from src.core.numeric.errors import DecimalOverflow, InvalidDecimalInput
from src.core.numeric.quantize import (
    ScaledDecimal,
    decimal_places,
    from_scaled_int,
    safe_to_scaled_int,
    to_scaled_int,
)
from src.core.numeric.rounding import RoundingMode

# =============================================================================
# ТЕСТЫ DECIMAL_PLACES
# =============================================================================


class TestDecimalPlaces:
    """Тесты для decimal_places"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12.0, 0),
            (0.0, 0),
            (-7.0, 0),
            (1.2345, 4),
            (100.12, 2),
            (-0.005, 3),
            (2.1, 1),
            (0.1 + 0.2, 1),
        ],
    )
    def test_estimates(self, value: float, expected: int) -> None:
        """Оценка знаков для типичных значений"""
        assert decimal_places(value) == expected

    def test_capped_by_max_scale(self) -> None:
        """Иррациональное значение ограничивается max_scale"""
        assert decimal_places(math.pi, max_scale=4) == 4

    def test_integer_input(self) -> None:
        """Целое int возвращает 0"""
        assert decimal_places(42) == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_raises(self, value: float) -> None:
        """NaN/Inf — InvalidDecimalInput"""
        with pytest.raises(InvalidDecimalInput):
            decimal_places(value)


# =============================================================================
# ТЕСТЫ TO_SCALED_INT
# =============================================================================


class TestToScaledInt:
    """Тесты для to_scaled_int"""

    def test_half_up_epsilon_boundary(self) -> None:
        """2.345 * 100 = 234.49999999999997 → 235"""
        assert to_scaled_int(2.345, 2) == 235

    def test_half_up_one_point_zero_zero_five(self) -> None:
        """1.005 → 101 (двоичная погрешность компенсируется)"""
        assert to_scaled_int(1.005, 2) == 101

    def test_half_up_negative_tie(self) -> None:
        """Отрицательная ничья уходит к +inf: -1.235 → -123"""
        assert to_scaled_int(-1.235, 2) == -123
        assert to_scaled_int(1.235, 2) == 124

    @pytest.mark.parametrize(
        "mode, expected",
        [
            (RoundingMode.HALF_UP, -124),
            (RoundingMode.FLOOR, -124),
            (RoundingMode.CEIL, -123),
            (RoundingMode.TRUNC, -123),
        ],
    )
    def test_modes_negative(self, mode: RoundingMode, expected: int) -> None:
        """-1.239 на scale 2 по всем режимам"""
        assert to_scaled_int(-1.239, 2, mode) == expected

    def test_mode_literal_accepted(self) -> None:
        """Режим можно передать строкой"""
        assert to_scaled_int(1.239, 2, "floor") == 123

    def test_scale_clamped(self) -> None:
        """Scale выше MAX_SCALE ограничивается"""
        assert to_scaled_int(1.0, 40) == 10**15

    def test_overflow_raises(self) -> None:
        """Выход за безопасный диапазон — DecimalOverflow"""
        with pytest.raises(DecimalOverflow, match="Integer conversion out of safe range"):
            to_scaled_int(1e16, 0)

    def test_overflow_from_scale(self) -> None:
        """Переполнение из-за scale, а не величины"""
        with pytest.raises(DecimalOverflow):
            to_scaled_int(123456789.0, 10)

    def test_double_overflow_raises_range_error(self) -> None:
        """value * 10^scale = inf — DecimalOverflow"""
        with pytest.raises(DecimalOverflow, match="Integer conversion out of safe range"):
            to_scaled_int(1e300, 15)
        with pytest.raises(InvalidDecimalInput):
            to_scaled_int(10**400, 0)

    def test_nan_raises(self) -> None:
        """NaN — InvalidDecimalInput"""
        with pytest.raises(InvalidDecimalInput):
            to_scaled_int(float("nan"), 2)

    @pytest.mark.parametrize(
        "mode, decimal_rounding",
        [
            (RoundingMode.HALF_UP, ROUND_HALF_UP),
            (RoundingMode.FLOOR, ROUND_FLOOR),
            (RoundingMode.CEIL, ROUND_CEILING),
            (RoundingMode.TRUNC, ROUND_DOWN),
        ],
    )
    def test_matches_decimal_quantize(self, mode: RoundingMode, decimal_rounding: str) -> None:
        """Совпадает с decimal.quantize на значениях без ничьей"""
        for value in [1.23456, -1.23456, 99.999, -0.004, 12345.6789]:
            expected = Decimal(repr(value)).quantize(Decimal("0.01"), rounding=decimal_rounding)
            assert to_scaled_int(value, 2, mode) == int(expected * 100)


# =============================================================================
# ТЕСТЫ SAFE_TO_SCALED_INT
# =============================================================================


class TestSafeToScaledInt:
    """Тесты для safe_to_scaled_int"""

    def test_no_degradation(self) -> None:
        """Значение в диапазоне — scale не меняется"""
        assert safe_to_scaled_int(1.5, 2) == ScaledDecimal(150, 2)

    def test_degrades_to_zero(self) -> None:
        """9e15 помещается только на scale 0"""
        assert safe_to_scaled_int(9e15, 2) == ScaledDecimal(9000000000000000, 0)

    def test_degrades_partially(self) -> None:
        """Деградация останавливается на первом подходящем scale"""
        result = safe_to_scaled_int(123456789012.345, 6)
        assert result.scale == 4
        assert abs(result.int_value) <= 2**53 - 1

    def test_degradation_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Деградация пишется в DEBUG лог"""
        caplog.set_level(logging.DEBUG, logger="src.core.numeric.quantize")
        safe_to_scaled_int(9e15, 2)
        assert "degraded scale" in caplog.text

    def test_exhausted_raises(self) -> None:
        """Не помещается даже на scale 0 — DecimalOverflow"""
        with pytest.raises(DecimalOverflow, match="even at scale 0"):
            safe_to_scaled_int(1e300, 2)

    def test_double_overflow_keeps_degrading(self) -> None:
        """value * 10^scale = inf не прерывает снижение scale"""
        with pytest.raises(DecimalOverflow, match="even at scale 0"):
            safe_to_scaled_int(1e300, 15)

    def test_negative_scale_clamped(self) -> None:
        """Отрицательный scale трактуется как 0"""
        assert safe_to_scaled_int(2.6, -1) == ScaledDecimal(3, 0)


# =============================================================================
# ТЕСТЫ FROM_SCALED_INT
# =============================================================================


class TestFromScaledInt:
    """Тесты для from_scaled_int и ScaledDecimal.to_float"""

    def test_basic(self) -> None:
        """235 на scale 2 → 2.35"""
        assert from_scaled_int(235, 2) == 2.35
        assert from_scaled_int(-5, 3) == -0.005
        assert from_scaled_int(42, 0) == 42

    def test_unsafe_integer_raises(self) -> None:
        """Небезопасное целое — InvalidDecimalInput"""
        with pytest.raises(InvalidDecimalInput):
            from_scaled_int(2**53, 0)

    def test_scaled_decimal_to_float(self) -> None:
        """ScaledDecimal → float"""
        assert ScaledDecimal(150, 2).to_float() == 1.5

    @pytest.mark.parametrize("value", [1.23, -45.6, 0.07, 19.99])
    def test_round_trip_on_representable_values(self, value: float) -> None:
        """Значения с ≤ scale знаков переживают квантование без изменений"""
        assert from_scaled_int(to_scaled_int(value, 2), 2) == value

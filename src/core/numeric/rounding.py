"""
Rounding — режимы округления и целочисленные примитивы

Модуль содержит общие примитивы всех слоёв движка:
- RoundingMode: четыре режима (half-up / floor / ceil / trunc)
- Округление масштабированного float в целое (граница float → int)
- Округление частного двух целых произвольной точности (граница rescale)
- Степени 10 и проверка безопасного целого

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Режим округления всегда передаётся параметром, глобального состояния нет
2. round_quotient корректен для всех комбинаций знаков делимого и делителя
3. Все операции детерминированы и воспроизводимы
"""

import math
from enum import Enum
from typing import Final, Union

from src.core.numeric.constants import HALF_UP_EPS, MAX_SAFE_INTEGER, MAX_SCALE
from src.core.numeric.errors import (
    DecimalDivisionByZero,
    DecimalOverflow,
    InvalidDecimalInput,
    UnsupportedRoundingMode,
)

# =============================================================================
# ТИПЫ
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления на границе целочисленного домена"""

    HALF_UP = "half-up"
    FLOOR = "floor"
    CEIL = "ceil"
    TRUNC = "trunc"


RoundingModeLike = Union[RoundingMode, str]

DEFAULT_ROUNDING_MODE: Final[RoundingMode] = RoundingMode.HALF_UP


def coerce_rounding_mode(mode: RoundingModeLike) -> RoundingMode:
    """
    Приведение литерала к RoundingMode.

    Args:
        mode: RoundingMode или строка ("half-up", "floor", "ceil", "trunc")

    Returns:
        RoundingMode

    Raises:
        UnsupportedRoundingMode: Если литерал неизвестен

    Examples:
        >>> coerce_rounding_mode("floor")
        <RoundingMode.FLOOR: 'floor'>
    """
    if isinstance(mode, RoundingMode):
        return mode
    try:
        return RoundingMode(mode)
    except ValueError:
        raise UnsupportedRoundingMode(f"Unsupported rounding mode: {mode!r}") from None


# =============================================================================
# СТЕПЕНИ 10 И МАСШТАБ
# =============================================================================


def clamp_scale(scale: int) -> int:
    """Ограничение scale диапазоном [0, MAX_SCALE]."""
    if scale < 0:
        return 0
    return min(scale, MAX_SCALE)


def pow10_float(scale: int) -> float:
    """
    10^scale как float; scale ограничивается диапазоном [0, MAX_SCALE].

    Все значения до 10^15 представимы в double точно.
    """
    return float(10 ** clamp_scale(scale))


def pow10_int(exponent: int) -> int:
    """
    10^exponent как целое произвольной точности.

    В отличие от pow10_float не ограничивает показатель: используется при
    rescale, где разница масштабов может достигать 2 * MAX_SCALE.
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    return 10**exponent


# =============================================================================
# БЕЗОПАСНЫЕ ЦЕЛЫЕ
# =============================================================================


def is_safe_integer(value: object) -> bool:
    """
    Проверка, является ли значение безопасным целым (|value| <= 2^53 - 1).

    Целочисленные float (например 123.0) считаются целыми, bool — нет.

    Examples:
        >>> is_safe_integer(2**53 - 1)
        True
        >>> is_safe_integer(2**53)
        False
        >>> is_safe_integer(1.5)
        False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return abs(value) <= MAX_SAFE_INTEGER
    if isinstance(value, float):
        return value.is_integer() and abs(value) <= MAX_SAFE_INTEGER
    return False


def require_safe_integer(value: object, name: str) -> int:
    """
    Валидация безопасного целого с приведением к int.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value как int

    Raises:
        InvalidDecimalInput: Если значение не является безопасным целым
    """
    if not is_safe_integer(value):
        raise InvalidDecimalInput(f"{name} must be a safe integer, got {value!r}")
    return int(value)


def require_finite(value: float, name: str) -> float:
    """
    Валидация конечного float.

    Raises:
        InvalidDecimalInput: Если value NaN/Inf или не число
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidDecimalInput(f"{name} must be a finite number, got {value!r}")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # int за пределами диапазона double
        finite = False
    if not finite:
        raise InvalidDecimalInput(f"{name} must be a finite number, got {value}")
    return value


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_scaled(scaled: float, mode: RoundingMode) -> int:
    """
    Округление масштабированного float до целого по режиму.

    half-up: сначала прибавляется HALF_UP_EPS, затем округление к ближайшему
    с разрешением ничьей вверх (к +inf). Сдвиг исправляет значения вида
    x.4999999999999997, которые концептуально равны x.5.
    Для отрицательных чисел ничья .5 поэтому уходит к нулю: -123.5 → -123.

    Args:
        scaled: value * 10^scale (конечный float)
        mode: Режим округления

    Returns:
        Округлённое целое (может выходить за безопасный диапазон — проверяет вызывающий)

    Raises:
        DecimalOverflow: Если scaled не конечен (value * 10^scale переполнил double)

    Examples:
        >>> round_scaled(234.49999999999997, RoundingMode.HALF_UP)
        235
        >>> round_scaled(-2.5, RoundingMode.TRUNC)
        -2
    """
    if not math.isfinite(scaled):
        raise DecimalOverflow(f"Scaled value is not finite: {scaled}")

    if mode is RoundingMode.FLOOR:
        return math.floor(scaled)
    if mode is RoundingMode.CEIL:
        return math.ceil(scaled)
    if mode is RoundingMode.TRUNC:
        return math.trunc(scaled)

    # floor + сравнение дробной части: scaled + 0.5 теряет точность при |scaled| >= 2^52
    adjusted = scaled + HALF_UP_EPS
    lower = math.floor(adjusted)
    if adjusted - lower >= 0.5:
        return lower + 1
    return lower


def round_quotient(dividend: int, divisor: int, mode: RoundingMode) -> int:
    """
    Частное двух целых произвольной точности с округлением по режиму.

    Базовое частное усекается к нулю, затем корректируется по остатку:
    - half-up: |2 * r| >= |divisor| → от нуля (ничья уходит от нуля)
    - ceil: положительное частное с ненулевым остатком → +1
    - floor: отрицательное частное с ненулевым остатком → -1
    - trunc: без коррекции

    Args:
        dividend: Делимое
        divisor: Делитель (не ноль)
        mode: Режим округления

    Returns:
        Округлённое частное

    Raises:
        DecimalDivisionByZero: Если divisor == 0

    Examples:
        >>> round_quotient(25, 10, RoundingMode.HALF_UP)
        3
        >>> round_quotient(-25, 10, RoundingMode.HALF_UP)
        -3
        >>> round_quotient(-21, 10, RoundingMode.FLOOR)
        -3
        >>> round_quotient(21, -10, RoundingMode.CEIL)
        -2
    """
    if divisor == 0:
        raise DecimalDivisionByZero("Division by zero in round_quotient")

    negative = (dividend < 0) != (divisor < 0)
    abs_divisor = abs(divisor)
    quotient, remainder = divmod(abs(dividend), abs_divisor)

    if remainder:
        if mode is RoundingMode.HALF_UP:
            if remainder * 2 >= abs_divisor:
                quotient += 1
        elif mode is RoundingMode.CEIL:
            if not negative:
                quotient += 1
        elif mode is RoundingMode.FLOOR:
            if negative:
                quotient += 1
        # TRUNC: модуль уже усечён к нулю

    return -quotient if negative else quotient

"""
Integer Domain — точное сложение и вычитание на общем scale

Оба операнда квантуются к одному scale, операция выполняется над целыми,
результат проверяется на безопасный диапазон и переводится обратно.
Гарантирует, например, 0.1 + 0.2 == 0.3 (в отличие от арифметики double).
"""

from typing import Optional

from src.core.numeric.constants import MAX_SCALE
from src.core.numeric.errors import DecimalOverflow
from src.core.numeric.quantize import decimal_places, from_scaled_int, to_scaled_int
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingModeLike,
    coerce_rounding_mode,
    is_safe_integer,
)


def auto_scale(a: float, b: float) -> int:
    """Общий scale двух операндов: min(MAX_SCALE, max(dp(a), dp(b)))."""
    return min(MAX_SCALE, max(decimal_places(a), decimal_places(b)))


def _combine(
    a: float,
    b: float,
    scale: int,
    mode: RoundingModeLike,
    subtract: bool,
) -> float:
    rounding = coerce_rounding_mode(mode)
    a_int = to_scaled_int(a, scale, rounding)
    b_int = to_scaled_int(b, scale, rounding)
    result = a_int - b_int if subtract else a_int + b_int

    if not is_safe_integer(result):
        op_name = "Subtraction" if subtract else "Addition"
        raise DecimalOverflow(
            f"{op_name} result out of safe range "
            f"(scale={scale}, mode={rounding.value}, a_int={a_int}, b_int={b_int})"
        )

    return from_scaled_int(result, scale)


def add_decimals(
    a: float,
    b: float,
    scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Сложение двух десятичных чисел на фиксированном scale.

    Args:
        a: Слагаемое A
        b: Слагаемое B
        scale: Общий scale обоих операндов и результата
        mode: Режим квантования операндов (default: half-up)

    Returns:
        a + b, округлённое до scale знаков

    Raises:
        InvalidDecimalInput: Если операнд NaN/Inf
        DecimalOverflow: Если операнд или сумма вне безопасного диапазона

    Examples:
        >>> add_decimals(0.1, 0.2, 1)
        0.3
    """
    return _combine(a, b, scale, mode, subtract=False)


def sub_decimals(
    a: float,
    b: float,
    scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Вычитание на фиксированном scale (симметрично add_decimals).

    Examples:
        >>> sub_decimals(0.3, 0.1, 1)
        0.2
    """
    return _combine(a, b, scale, mode, subtract=True)


def decimal_add(
    a: float,
    b: float,
    *,
    scale: Optional[int] = None,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Десятичное сложение с автоматическим выбором scale.

    Если scale не задан, используется максимум оценок decimal_places операндов
    (не больше MAX_SCALE).

    Examples:
        >>> decimal_add(1.2345, 2.1)
        3.3345
    """
    if scale is None:
        scale = auto_scale(a, b)
    return add_decimals(a, b, scale, mode)


def decimal_sub(
    a: float,
    b: float,
    *,
    scale: Optional[int] = None,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """Десятичное вычитание с автоматическим выбором scale."""
    if scale is None:
        scale = auto_scale(a, b)
    return sub_decimals(a, b, scale, mode)

"""
Bridges — операции между целочисленным доменом и десятичными числами

Позволяют объединить уже масштабированное целое (например, аккумулятор)
с "сырым" десятичным входом без лишнего шага округления:
оба операнда приводятся к общему operating scale (op_scale), операция
выполняется над целыми, результат выводится на out_scale за один шаг.
"""

import logging

from src.core.numeric.auto_precision import mul_decimals_auto
from src.core.numeric.errors import DecimalOverflow
from src.core.numeric.quantize import from_scaled_int, to_scaled_int
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingModeLike,
    clamp_scale,
    coerce_rounding_mode,
    is_safe_integer,
    require_finite,
    require_safe_integer,
)
from src.core.numeric.scaled_ops import mul_scaled_ints

logger = logging.getLogger(__name__)


def rescale_scaled_int(
    int_value: int,
    from_scale: int,
    to_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> int:
    """
    Перевод целого из from_scale в to_scale.

    Путь "целое → десятичное → целое на to_scale" даёт ровно один шаг
    округления на границе.

    Args:
        int_value: Безопасное целое на from_scale
        from_scale: Текущий scale
        to_scale: Целевой scale
        mode: Режим округления (default: half-up)

    Returns:
        Безопасное целое на to_scale

    Raises:
        InvalidDecimalInput: Если int_value не безопасное целое
        DecimalOverflow: Если результат вне безопасного диапазона

    Examples:
        >>> rescale_scaled_int(12345, 4, 2)
        123
        >>> rescale_scaled_int(125, 2, 4)
        12500
    """
    value = require_safe_integer(int_value, "int_value")
    decimal = from_scaled_int(value, from_scale)
    return to_scaled_int(decimal, to_scale, mode)


def add_int_and_decimal(
    a_int: int,
    a_scale: int,
    b_decimal: float,
    op_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Сложение масштабированного целого и десятичного числа.

    Args:
        a_int: A в целочисленном домене (безопасное целое)
        a_scale: Scale A
        b_decimal: B как десятичное число
        op_scale: Scale, на котором выполняется сложение
        out_scale: Scale результата
        mode: Режим округления (default: half-up)

    Returns:
        a + b на out_scale

    Raises:
        InvalidDecimalInput: Если b_decimal NaN/Inf или a_int не безопасное целое
        DecimalOverflow: Если сумма вне безопасного диапазона

    Examples:
        >>> add_int_and_decimal(1050, 2, 0.255, 3, 2)
        10.76
    """
    require_finite(b_decimal, "b_decimal")
    a_value = require_safe_integer(a_int, "a_int")
    rounding = coerce_rounding_mode(mode)
    s_op = clamp_scale(op_scale)

    a_op = rescale_scaled_int(a_value, a_scale, s_op, rounding)
    b_op = to_scaled_int(b_decimal, s_op, rounding)
    total = a_op + b_op

    if not is_safe_integer(total):
        raise DecimalOverflow(
            f"Addition result out of safe range "
            f"(op_scale={s_op}, out_scale={out_scale}, a_op={a_op}, b_op={b_op})"
        )

    # Сумма на op_scale выводится на out_scale одним округлением
    return mul_scaled_ints(total, s_op, 1, 0, out_scale, rounding)


def mul_int_by_decimal(
    a_int: int,
    a_scale: int,
    b_decimal: float,
    op_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Умножение масштабированного целого на десятичное число.

    Прямой путь: оба операнда на op_scale, точное умножение, вывод на out_scale.
    При переполнении — переход на mul_decimals_auto по десятичному значению A
    (а не по уже округлённому A на op_scale), чтобы не округлять дважды.

    Examples:
        >>> mul_int_by_decimal(10000, 2, 0.0825, 4, 2)
        8.25
    """
    require_finite(b_decimal, "b_decimal")
    a_value = require_safe_integer(a_int, "a_int")
    rounding = coerce_rounding_mode(mode)
    s_op = clamp_scale(op_scale)

    try:
        b_op = to_scaled_int(b_decimal, s_op, rounding)
        a_op = rescale_scaled_int(a_value, a_scale, s_op, rounding)
        return mul_scaled_ints(a_op, s_op, b_op, s_op, out_scale, rounding)
    except DecimalOverflow:
        logger.debug(
            "mul_int_by_decimal falling back to auto precision: "
            "a_int=%d a_scale=%d b_decimal=%r op_scale=%d out_scale=%d",
            a_value,
            a_scale,
            b_decimal,
            s_op,
            out_scale,
        )

    a_decimal = from_scaled_int(a_value, a_scale)
    return mul_decimals_auto(a_decimal, b_decimal, s_op, s_op, out_scale, rounding)

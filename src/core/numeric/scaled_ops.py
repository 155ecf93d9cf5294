"""
Scaled Ops — точное умножение и деление в целочисленном домене

Операнды — уже квантованные пары (integer, scale). Произведение/частное
вычисляется в целых произвольной точности (Python int), а округление
выполняется ровно один раз: при rescale к out_scale через round_quotient.

Формулы:
    mul: a_int * b_int имеет scale a_scale + b_scale;
         rescale к out_scale: / 10^(in - out) (с округлением) или * 10^(out - in)
    div: q = round(a_int * 10^(b_scale + out_scale) / (b_int * 10^a_scale))

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Возвращаемое значение получено из безопасного целого
2. Деление на ноль — фатальная ошибка при любом режиме округления
3. Промежуточные значения могут быть сколь угодно большими, результат — нет
"""

from src.core.numeric.constants import FACTOR_SCALE, MONEY_SCALE
from src.core.numeric.errors import DecimalDivisionByZero, DecimalOverflow
from src.core.numeric.quantize import from_scaled_int, to_scaled_int
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingMode,
    RoundingModeLike,
    clamp_scale,
    coerce_rounding_mode,
    is_safe_integer,
    pow10_int,
    require_safe_integer,
    round_quotient,
)

# =============================================================================
# RESCALE
# =============================================================================


def rescale_product(
    product: int,
    in_scale: int,
    out_scale: int,
    mode: RoundingMode,
) -> int:
    """
    Перевод целого со scale in_scale к out_scale.

    Сужение делит на 10^(in_scale - out_scale) с округлением round_quotient,
    расширение умножает на 10^(out_scale - in_scale) без потерь.
    Результат не проверяется на безопасный диапазон.
    """
    diff = out_scale - in_scale
    if diff < 0:
        return round_quotient(product, pow10_int(-diff), mode)
    if diff > 0:
        return product * pow10_int(diff)
    return product


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_scaled_ints(
    a_int: int,
    a_scale: int,
    b_int: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Умножение двух квантованных значений с выводом на out_scale.

    Args:
        a_int: Целочисленное представление A (безопасное целое)
        a_scale: Scale A
        b_int: Целочисленное представление B (безопасное целое)
        b_scale: Scale B
        out_scale: Scale результата
        mode: Режим округления при сужении (default: half-up)

    Returns:
        Произведение как десятичное число с out_scale знаками

    Raises:
        InvalidDecimalInput: Если a_int или b_int не безопасные целые
        DecimalOverflow: Если результат на out_scale вне безопасного диапазона

    Examples:
        >>> mul_scaled_ints(1999, 2, 3, 0, 2)
        59.97
        >>> mul_scaled_ints(125, 2, 1, 0, 1)
        1.3
    """
    a_value = require_safe_integer(a_int, "a_int")
    b_value = require_safe_integer(b_int, "b_int")
    rounding = coerce_rounding_mode(mode)

    a_s = clamp_scale(a_scale)
    b_s = clamp_scale(b_scale)
    o_s = clamp_scale(out_scale)

    product = a_value * b_value
    result = rescale_product(product, a_s + b_s, o_s, rounding)

    if not is_safe_integer(result):
        raise DecimalOverflow(
            f"Multiplication result out of safe range "
            f"(a_scale={a_s}, b_scale={b_s}, out_scale={o_s}, diff={o_s - a_s - b_s})"
        )

    return from_scaled_int(result, o_s)


def mul_decimals(
    a: float,
    b: float,
    a_scale: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Умножение десятичных чисел: квантование к a_scale / b_scale, затем mul_scaled_ints.

    Без деградации точности: переполнение — ошибка (см. mul_decimals_auto).
    """
    a_int = to_scaled_int(a, a_scale, mode)
    b_int = to_scaled_int(b, b_scale, mode)
    return mul_scaled_ints(a_int, a_scale, b_int, b_scale, out_scale, mode)


def multiply_money_by_factor(
    amount: float,
    factor: float,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Денежная сумма (2 знака) × коэффициент (4 знака) → денежная сумма (2 знака).

    Examples:
        >>> multiply_money_by_factor(100.00, 0.0825)
        8.25
    """
    return mul_decimals(amount, factor, MONEY_SCALE, FACTOR_SCALE, MONEY_SCALE, mode)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def scaled_quotient(
    a_int: int,
    a_scale: int,
    b_int: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingMode,
) -> int:
    """
    Целочисленное частное A / B на out_scale (без проверки безопасного диапазона).

    Raises:
        DecimalDivisionByZero: Если b_int == 0
    """
    if b_int == 0:
        raise DecimalDivisionByZero(
            f"Division by zero (b_int=0, b_scale={b_scale})"
        )
    numerator = a_int * pow10_int(b_scale + out_scale)
    denominator = b_int * pow10_int(a_scale)
    return round_quotient(numerator, denominator, mode)


def div_scaled_ints(
    a_int: int,
    a_scale: int,
    b_int: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Деление двух квантованных значений с выводом на out_scale.

    Числитель и знаменатель масштабируются так, что частное сразу получается
    на out_scale; округление — одно, через round_quotient.

    Args:
        a_int: Целочисленное представление делимого (безопасное целое)
        a_scale: Scale делимого
        b_int: Целочисленное представление делителя (безопасное целое, не 0)
        b_scale: Scale делителя
        out_scale: Scale результата
        mode: Режим округления (default: half-up)

    Returns:
        Частное как десятичное число с out_scale знаками

    Raises:
        InvalidDecimalInput: Если a_int или b_int не безопасные целые
        DecimalDivisionByZero: Если b_int == 0
        DecimalOverflow: Если результат вне безопасного диапазона

    Examples:
        >>> div_scaled_ints(10, 0, 3, 0, 4)
        3.3333
        >>> div_scaled_ints(2, 0, 3, 0, 2, "ceil")
        0.67
    """
    a_value = require_safe_integer(a_int, "a_int")
    b_value = require_safe_integer(b_int, "b_int")
    rounding = coerce_rounding_mode(mode)

    a_s = clamp_scale(a_scale)
    b_s = clamp_scale(b_scale)
    o_s = clamp_scale(out_scale)

    result = scaled_quotient(a_value, a_s, b_value, b_s, o_s, rounding)

    if not is_safe_integer(result):
        raise DecimalOverflow(
            f"Division result out of safe range "
            f"(a_scale={a_s}, b_scale={b_s}, out_scale={o_s})"
        )

    return from_scaled_int(result, o_s)

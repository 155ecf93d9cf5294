"""
Auto Precision — умножение и деление с деградацией точности вместо переполнения

Если результат на запрошенном out_scale не помещается в безопасный диапазон,
функции снижают точность (входные scale, затем out_scale), а не падают:
менее точный, но валидный ответ предпочтительнее ошибки для пакетных
расчётов вида price × ratio.

Умножение (mul_decimals_auto):
1. Scale каждого операнда снижается до его значащих знаков (significant_scale):
   лишние знаки несут только двоичный шум квантования
2. Квантование входов (safe_to_scaled_int), точное произведение
3. Прогноз: |product на out_scale| > MAX_SAFE_INTEGER ? Если да — out_scale
   снижается на extra_exp цифр
4. Повтор с понижением out_scale до 0

Деление (div_decimals_auto): явный цикл out_scale, out_scale - 1, ..., 0.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деградация — успешное завершение, не ошибка
2. Безопасный диапазон не нарушается никогда: при исчерпании — DecimalOverflow
3. Деление на ноль не повторяется и не деградирует
4. mul_decimals_auto(a, b, s, s, o) == mul_decimals_auto(b, a, s, s, o): каждый
   операнд обрабатывается независимо от другого
"""

import logging

from src.core.numeric.constants import MAX_SAFE_INTEGER
from src.core.numeric.errors import DecimalDivisionByZero, DecimalOverflow
from src.core.numeric.quantize import decimal_places, from_scaled_int, safe_to_scaled_int
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingModeLike,
    clamp_scale,
    coerce_rounding_mode,
    require_finite,
)
from src.core.numeric.scaled_ops import mul_scaled_ints, rescale_product, scaled_quotient

logger = logging.getLogger(__name__)


# =============================================================================
# ПРОГНОЗ ПЕРЕПОЛНЕНИЯ
# =============================================================================


def overflow_digits(value: int) -> int:
    """
    Сколько десятичных цифр нужно снять с |value|, чтобы войти в безопасный диапазон.

    Examples:
        >>> overflow_digits(12345)
        0
        >>> overflow_digits(10**17)
        2
    """
    magnitude = abs(value)
    digits = 0
    while magnitude > MAX_SAFE_INTEGER:
        magnitude //= 10
        digits += 1
    return digits


def significant_scale(value: float, scale: int) -> int:
    """
    Scale операнда без знаков сверх значащих: min(scale, decimal_places(value, scale)).

    Снятие этих знаков не теряет значащих цифр и убирает шум квантования
    вблизи 2^53 (8502159.3 на scale 9 даёт 8502159300000001).

    Examples:
        >>> significant_scale(1.5, 6)
        1
        >>> significant_scale(1.2345, 2)
        2
    """
    return min(scale, decimal_places(value, scale))


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_decimals_auto(
    a: float,
    b: float,
    a_scale: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Умножение с прогнозом переполнения и деградацией точности.

    Все scale ограничиваются [0, MAX_SCALE]. out_scale может превышать
    a_scale + b_scale: если расширение приводит к переполнению, оно будет
    снижено циклом деградации.

    Args:
        a: Множитель A
        b: Множитель B
        a_scale: Scale квантования A
        b_scale: Scale квантования B
        out_scale: Желаемый scale результата
        mode: Режим округления (default: half-up)

    Returns:
        Произведение на out_scale или на меньшем scale, если out_scale недостижим

    Raises:
        InvalidDecimalInput: Если операнд NaN/Inf
        DecimalOverflow: Если результат не помещается даже на scale 0

    Examples:
        >>> mul_decimals_auto(19.99, 3, 2, 0, 2)
        59.97
    """
    rounding = coerce_rounding_mode(mode)
    o_s = clamp_scale(out_scale)

    a_q = safe_to_scaled_int(a, significant_scale(a, clamp_scale(a_scale)), rounding)
    b_q = safe_to_scaled_int(b, significant_scale(b, clamp_scale(b_scale)), rounding)

    # Прогноз: значение произведения на out_scale до проверки безопасного диапазона
    product = a_q.int_value * b_q.int_value
    projected = rescale_product(product, a_q.scale + b_q.scale, o_s, rounding)
    extra_exp = overflow_digits(projected)

    if extra_exp > 0:
        new_o_s = max(0, o_s - extra_exp)
        logger.debug(
            "mul_decimals_auto reducing precision: extra_exp=%d "
            "a_scale=%d b_scale=%d out_scale=%d->%d",
            extra_exp,
            a_q.scale,
            b_q.scale,
            o_s,
            new_o_s,
        )
        o_s = new_o_s

    attempt_out = o_s
    while True:
        try:
            return mul_scaled_ints(
                a_q.int_value, a_q.scale, b_q.int_value, b_q.scale, attempt_out, rounding
            )
        except DecimalOverflow:
            if attempt_out == 0:
                raise
            attempt_out -= 1
            logger.debug(
                "mul_decimals_auto lowering out_scale: requested=%d attempt=%d",
                out_scale,
                attempt_out,
            )


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def div_decimals_auto(
    a: float,
    b: float,
    a_scale: int,
    b_scale: int,
    out_scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Деление с понижением out_scale при переполнении.

    Пробует out_scale, out_scale - 1, ..., 0; возвращает первый результат,
    помещающийся в безопасный диапазон.

    Args:
        a: Делимое
        b: Делитель (не 0)
        a_scale: Scale квантования делимого
        b_scale: Scale квантования делителя
        out_scale: Желаемый scale результата
        mode: Режим округления (default: half-up)

    Returns:
        Частное на out_scale или на меньшем scale

    Raises:
        InvalidDecimalInput: Если операнд NaN/Inf
        DecimalDivisionByZero: Если b == 0 или b квантуется в 0 на b_scale
        DecimalOverflow: Если результат не помещается даже на scale 0

    Examples:
        >>> div_decimals_auto(10, 3, 0, 0, 4)
        3.3333
    """
    require_finite(a, "a")
    require_finite(b, "b")
    if b == 0:
        raise DecimalDivisionByZero(f"Division by zero (a={a}, b={b})")

    rounding = coerce_rounding_mode(mode)
    a_s = clamp_scale(a_scale)
    b_s = clamp_scale(b_scale)
    o_s = clamp_scale(out_scale)

    a_q = safe_to_scaled_int(a, a_s, rounding)
    b_q = safe_to_scaled_int(b, b_s, rounding)
    if b_q.int_value == 0:
        raise DecimalDivisionByZero(
            f"Divisor quantizes to zero (b={b}, b_scale={b_q.scale}, mode={rounding.value})"
        )

    for attempt_out in range(o_s, -1, -1):
        quotient = scaled_quotient(
            a_q.int_value, a_q.scale, b_q.int_value, b_q.scale, attempt_out, rounding
        )
        if abs(quotient) <= MAX_SAFE_INTEGER:
            if attempt_out != o_s:
                logger.debug(
                    "div_decimals_auto lowered out_scale: requested=%d used=%d",
                    o_s,
                    attempt_out,
                )
            return from_scaled_int(quotient, attempt_out)

    raise DecimalOverflow(
        f"Division result out of safe range even at out_scale 0 "
        f"(a={a}, b={b}, a_scale={a_q.scale}, b_scale={b_q.scale})"
    )

"""
Quantize — оценка масштаба и переход между float и (integer, scale)

Модуль реализует границу "десятичное число ↔ целочисленный домен":
- decimal_places: эвристическая оценка числа значащих знаков после запятой
- to_scaled_int: value → round(value * 10^scale) по режиму округления
- safe_to_scaled_int: то же, но со снижением scale вместо переполнения
- from_scaled_int: точное обратное преобразование int / 10^scale

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат квантования всегда безопасное целое (|int| <= 2^53 - 1), иначе ошибка
2. to_scaled_int никогда не теряет точность молча
3. NaN/Inf не квантуются (InvalidDecimalInput)
"""

import logging
import math
from typing import NamedTuple

from src.core.numeric.constants import MAX_SCALE, SCALE_DETECT_EPS
from src.core.numeric.errors import DecimalOverflow
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingModeLike,
    clamp_scale,
    coerce_rounding_mode,
    is_safe_integer,
    pow10_float,
    pow10_int,
    require_finite,
    require_safe_integer,
    round_scaled,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ТИПЫ
# =============================================================================


class ScaledDecimal(NamedTuple):
    """
    Десятичное значение в целочисленном домене: int_value / 10^scale.

    Живёт только внутри одного вызова: не хранится и не сериализуется.
    """

    int_value: int  # Безопасное целое
    scale: int  # Число знаков после запятой, [0, MAX_SCALE]

    def to_float(self) -> float:
        """Обратное преобразование в десятичное число."""
        return from_scaled_int(self.int_value, self.scale)


# =============================================================================
# ОЦЕНКА МАСШТАБА
# =============================================================================


def decimal_places(value: float, max_scale: int = MAX_SCALE) -> int:
    """
    Оценка числа знаков после запятой, которое реально несёт float.

    Значение по модулю умножается на 10^s для s = 1..max_scale; первый s,
    при котором |scaled - round(scaled)| < SCALE_DETECT_EPS, принимается.
    Это эвристика, а не точное разложение: значения с большим числом
    значащих цифр ограничиваются max_scale.

    Args:
        value: Конечное десятичное значение
        max_scale: Верхняя граница оценки (default: MAX_SCALE)

    Returns:
        Оценка scale в [0, max_scale]

    Raises:
        InvalidDecimalInput: Если value NaN/Inf

    Examples:
        >>> decimal_places(12.0)
        0
        >>> decimal_places(1.2345)
        4
        >>> decimal_places(0.1 + 0.2)
        1
    """
    require_finite(value, "value")

    abs_value = abs(float(value))
    if abs_value.is_integer():
        return 0

    for s in range(1, max_scale + 1):
        scaled = abs_value * pow10_float(s)
        diff = abs(scaled - round(scaled))
        if diff < SCALE_DETECT_EPS:
            return s

    return max_scale


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def to_scaled_int(
    value: float,
    scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> int:
    """
    Перевод десятичного значения в целое с фиксированным scale.

    value * 10^scale округляется по режиму mode; scale ограничивается [0, MAX_SCALE].

    Args:
        value: Конечное десятичное значение
        scale: Число знаков после запятой
        mode: Режим округления (default: half-up)

    Returns:
        Безопасное целое

    Raises:
        InvalidDecimalInput: Если value NaN/Inf
        DecimalOverflow: Если результат вне безопасного диапазона

    Examples:
        >>> to_scaled_int(2.345, 2)
        235
        >>> to_scaled_int(-1.239, 2, "trunc")
        -123
    """
    require_finite(value, "value")
    rounding = coerce_rounding_mode(mode)

    message = (
        f"Integer conversion out of safe range "
        f"(value={value}, scale={scale}, mode={rounding.value})"
    )
    try:
        result = round_scaled(value * pow10_float(scale), rounding)
    except DecimalOverflow:
        raise DecimalOverflow(message) from None

    if not is_safe_integer(result):
        raise DecimalOverflow(message)

    return result


def safe_to_scaled_int(
    value: float,
    scale: int,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> ScaledDecimal:
    """
    Квантование со снижением scale вместо переполнения.

    Пробует scale, scale - 1, ..., 0 и возвращает первую пару, помещающуюся
    в безопасный диапазон. Используется, когда вызывающий не контролирует
    порядок величины входа.

    Args:
        value: Конечное десятичное значение
        scale: Желаемое число знаков после запятой
        mode: Режим округления

    Returns:
        ScaledDecimal с фактически использованным scale

    Raises:
        InvalidDecimalInput: Если value NaN/Inf
        DecimalOverflow: Если даже при scale = 0 результат вне безопасного диапазона

    Examples:
        >>> safe_to_scaled_int(1.5, 2)
        ScaledDecimal(int_value=150, scale=2)
        >>> safe_to_scaled_int(9e15, 2)
        ScaledDecimal(int_value=9000000000000000, scale=0)
    """
    require_finite(value, "value")
    rounding = coerce_rounding_mode(mode)
    requested = clamp_scale(scale)

    for s in range(requested, -1, -1):
        try:
            int_value = round_scaled(value * pow10_float(s), rounding)
        except DecimalOverflow:
            # value * 10^s переполнил double: пробуем меньший scale
            continue
        if is_safe_integer(int_value):
            if s != requested:
                logger.debug(
                    "safe_to_scaled_int degraded scale: value=%r requested=%d used=%d",
                    value,
                    requested,
                    s,
                )
            return ScaledDecimal(int_value, s)

    raise DecimalOverflow(
        f"Integer conversion out of safe range even at scale 0 "
        f"(value={value}, mode={rounding.value})"
    )


def from_scaled_int(scaled_int: int, scale: int) -> float:
    """
    Обратное преобразование: scaled_int / 10^scale.

    Деление int / int в Python округляется корректно, поэтому для безопасных
    целых результат — ближайший double к точному десятичному значению.

    Raises:
        InvalidDecimalInput: Если scaled_int не безопасное целое

    Examples:
        >>> from_scaled_int(235, 2)
        2.35
    """
    int_value = require_safe_integer(scaled_int, "scaled_int")
    return int_value / pow10_int(clamp_scale(scale))

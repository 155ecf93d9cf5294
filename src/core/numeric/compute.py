"""
Decimal Compute — единая точка входа движка десятичной арифметики

Маршрутизация по оператору:
- add / sub: сложение/вычитание в целочисленном домене, scale по умолчанию —
  максимум оценок decimal_places операндов
- mul: mul_decimals_auto; без out_scale результат считается на
  min(MAX_SCALE, a_scale + b_scale) и затем усекается до фактически
  значащих знаков
- div: всегда div_decimals_auto; без out_scale — пробный расчёт на MAX_SCALE
  и усечение до значащих знаков; делитель 0 — фатальная ошибка

Каждый вызов независим и реентерабелен: состояния нет.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from src.core.numeric.auto_precision import div_decimals_auto, mul_decimals_auto
from src.core.numeric.constants import MAX_SCALE
from src.core.numeric.errors import DecimalDivisionByZero, UnsupportedOperator
from src.core.numeric.integer_domain import add_decimals, auto_scale, sub_decimals
from src.core.numeric.quantize import decimal_places, from_scaled_int, to_scaled_int
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingMode,
    RoundingModeLike,
    clamp_scale,
    coerce_rounding_mode,
    require_finite,
)

# =============================================================================
# ТИПЫ
# =============================================================================


class DecimalOp(str, Enum):
    """Оператор decimal_compute"""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"


DecimalOpLike = Union[DecimalOp, str]


class DecimalComputeParams(BaseModel):
    """
    Параметры decimal_compute: {op, a, b, outScale?}.

    Immutable модель (frozen=True). Принимает как out_scale, так и outScale.
    NaN/Inf в a/b модель пропускает: их отклоняет движок (InvalidDecimalInput),
    чтобы вид ошибки совпадал при вызове через модель и напрямую.
    """

    op: DecimalOp = Field(..., description="Оператор (add/sub/mul/div)")
    a: float = Field(..., description="Левый операнд")
    b: float = Field(..., description="Правый операнд")
    out_scale: Optional[int] = Field(
        default=None,
        ge=0,
        le=MAX_SCALE,
        alias="outScale",
        description="Scale результата; None — автоматический выбор",
    )
    mode: RoundingMode = Field(
        default=DEFAULT_ROUNDING_MODE, description="Режим округления"
    )

    model_config = {"frozen": True, "populate_by_name": True}  # Immutable

    def compute(self) -> float:
        """Вычисление через decimal_compute."""
        return decimal_compute(self.op, self.a, self.b, self.out_scale, self.mode)


# =============================================================================
# ДИСПЕТЧЕРИЗАЦИЯ
# =============================================================================


def _trim_to_significant(value: float, max_scale: int) -> float:
    """
    Усечение результата до оценки его значащих знаков (не больше max_scale).

    value уже округлён по mode и лежит на сетке своих значащих знаков: шаг
    снимает только двоичный шум, поэтому всегда half-up (к ближайшему).
    """
    significant = min(decimal_places(value, MAX_SCALE), max_scale)
    if significant == max_scale:
        return value
    rounded = to_scaled_int(value, significant, RoundingMode.HALF_UP)
    return from_scaled_int(rounded, significant)


def _compute_add(a: float, b: float, out_scale: Optional[int], mode: RoundingMode) -> float:
    scale = auto_scale(a, b) if out_scale is None else out_scale
    return add_decimals(a, b, scale, mode)


def _compute_sub(a: float, b: float, out_scale: Optional[int], mode: RoundingMode) -> float:
    scale = auto_scale(a, b) if out_scale is None else out_scale
    return sub_decimals(a, b, scale, mode)


def _compute_mul(a: float, b: float, out_scale: Optional[int], mode: RoundingMode) -> float:
    a_scale = decimal_places(a)
    b_scale = decimal_places(b)

    if out_scale is not None:
        return mul_decimals_auto(a, b, a_scale, b_scale, out_scale, mode)

    sum_scale = min(a_scale + b_scale, MAX_SCALE)
    high = mul_decimals_auto(a, b, a_scale, b_scale, sum_scale, mode)
    return _trim_to_significant(high, sum_scale)


def _compute_div(a: float, b: float, out_scale: Optional[int], mode: RoundingMode) -> float:
    if b == 0:
        raise DecimalDivisionByZero(f"Division by zero (a={a}, b={b})")

    a_scale = decimal_places(a)
    b_scale = decimal_places(b)

    if out_scale is not None:
        return div_decimals_auto(a, b, a_scale, b_scale, out_scale, mode)

    high = div_decimals_auto(a, b, a_scale, b_scale, MAX_SCALE, mode)
    return _trim_to_significant(high, MAX_SCALE)


def decimal_compute(
    op: DecimalOpLike,
    a: float,
    b: float,
    out_scale: Optional[int] = None,
    mode: RoundingModeLike = DEFAULT_ROUNDING_MODE,
) -> float:
    """
    Единая точка входа: десятичная операция с фиксированной точкой.

    Args:
        op: Оператор ("add", "sub", "mul", "div" или DecimalOp)
        a: Левый операнд (конечный float)
        b: Правый операнд (конечный float)
        out_scale: Scale результата; None — автоматический выбор.
                   Ограничивается диапазоном [0, MAX_SCALE]
        mode: Режим округления (default: half-up)

    Returns:
        Результат операции как float

    Raises:
        UnsupportedOperator: Если оператор неизвестен
        InvalidDecimalInput: Если операнд NaN/Inf
        DecimalDivisionByZero: Если op == "div" и b == 0
        DecimalOverflow: Если результат не помещается в безопасный диапазон

    Examples:
        >>> decimal_compute("add", 0.1, 0.2)
        0.3
        >>> decimal_compute("mul", 19.99, 3, out_scale=2)
        59.97
        >>> decimal_compute("div", 10, 3, out_scale=4)
        3.3333
    """
    try:
        operator = op if isinstance(op, DecimalOp) else DecimalOp(op)
    except ValueError:
        raise UnsupportedOperator(f"Unsupported operator: {op!r}") from None

    rounding = coerce_rounding_mode(mode)
    require_finite(a, "a")
    require_finite(b, "b")
    scale = None if out_scale is None else clamp_scale(out_scale)

    if operator is DecimalOp.ADD:
        return _compute_add(a, b, scale, rounding)
    elif operator is DecimalOp.SUB:
        return _compute_sub(a, b, scale, rounding)
    elif operator is DecimalOp.MUL:
        return _compute_mul(a, b, scale, rounding)
    elif operator is DecimalOp.DIV:
        return _compute_div(a, b, scale, rounding)
    else:
        raise UnsupportedOperator(f"Unsupported operator: {operator!r}")

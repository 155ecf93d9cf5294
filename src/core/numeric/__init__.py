"""
Core numeric modules

Десятичная арифметика с фиксированной точкой для денежных расчётов
и коэффициентов. Рекомендуемая точка входа — decimal_compute.
"""

# Constants
from src.core.numeric.constants import (
    FACTOR_SCALE,
    HALF_UP_EPS,
    MAX_SAFE_INTEGER,
    MAX_SCALE,
    MONEY_SCALE,
    SCALE_DETECT_EPS,
)

# Errors
from src.core.numeric.errors import (
    DecimalDivisionByZero,
    DecimalOverflow,
    DecimalRangeError,
    InvalidDecimalInput,
    UnsupportedOperator,
    UnsupportedRoundingMode,
)

# Rounding
from src.core.numeric.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingMode,
    coerce_rounding_mode,
    is_safe_integer,
    round_quotient,
)

# Quantize
from src.core.numeric.quantize import (
    ScaledDecimal,
    decimal_places,
    from_scaled_int,
    safe_to_scaled_int,
    to_scaled_int,
)

# Integer domain add/sub
from src.core.numeric.integer_domain import (
    add_decimals,
    decimal_add,
    decimal_sub,
    sub_decimals,
)

# Exact multiply/divide
from src.core.numeric.scaled_ops import (
    div_scaled_ints,
    mul_decimals,
    mul_scaled_ints,
    multiply_money_by_factor,
)

# Auto precision
from src.core.numeric.auto_precision import (
    div_decimals_auto,
    mul_decimals_auto,
)

# Bridges
from src.core.numeric.bridges import (
    add_int_and_decimal,
    mul_int_by_decimal,
    rescale_scaled_int,
)

# Facade
from src.core.numeric.compute import (
    DecimalComputeParams,
    DecimalOp,
    decimal_compute,
)

__all__ = [
    # Constants
    "FACTOR_SCALE",
    "HALF_UP_EPS",
    "MAX_SAFE_INTEGER",
    "MAX_SCALE",
    "MONEY_SCALE",
    "SCALE_DETECT_EPS",
    # Errors
    "DecimalDivisionByZero",
    "DecimalOverflow",
    "DecimalRangeError",
    "InvalidDecimalInput",
    "UnsupportedOperator",
    "UnsupportedRoundingMode",
    # Rounding
    "DEFAULT_ROUNDING_MODE",
    "RoundingMode",
    "coerce_rounding_mode",
    "is_safe_integer",
    "round_quotient",
    # Quantize
    "ScaledDecimal",
    "decimal_places",
    "from_scaled_int",
    "safe_to_scaled_int",
    "to_scaled_int",
    # Integer domain
    "add_decimals",
    "decimal_add",
    "decimal_sub",
    "sub_decimals",
    # Exact multiply/divide
    "div_scaled_ints",
    "mul_decimals",
    "mul_scaled_ints",
    "multiply_money_by_factor",
    # Auto precision
    "div_decimals_auto",
    "mul_decimals_auto",
    # Bridges
    "add_int_and_decimal",
    "mul_int_by_decimal",
    "rescale_scaled_int",
    # Facade
    "DecimalComputeParams",
    "DecimalOp",
    "decimal_compute",
]

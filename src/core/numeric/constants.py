"""
Numeric Constants — параметры движка десятичной арифметики с фиксированной точкой

Все параметры заданы как константы модуля (не конфигурируются в runtime),
чтобы исключить расхождение результатов между окружениями при сверке
финансовых расчётов.
"""

from typing import Final

# =============================================================================
# ГРАНИЦЫ ЦЕЛОЧИСЛЕННОГО ДОМЕНА
# =============================================================================

# Максимальный показатель степени 10 для scale.
# 10^15 точно представимо в double, произведения остаются в пределах 53-битной мантиссы
MAX_SCALE: Final[int] = 15

# Максимальное "безопасное" целое (2^53 - 1): граница точного представления
# целых чисел в IEEE-754 double
MAX_SAFE_INTEGER: Final[int] = 2**53 - 1


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог оценки числа знаков после запятой (decimal_places):
# значение, умноженное на 10^s, считается целым при |diff| < SCALE_DETECT_EPS
SCALE_DETECT_EPS: Final[float] = 1e-7

# Положительный сдвиг перед half-up округлением.
# Компенсирует двоичную погрешность на границе .5 (например 2.345 * 100 = 234.49999999999997)
HALF_UP_EPS: Final[float] = 1e-12


# =============================================================================
# ДЕНЕЖНЫЕ ТОЧНОСТИ
# =============================================================================

# Денежная сумма: 2 знака
MONEY_SCALE: Final[int] = 2

# Коэффициент (ставка, доля выплаты): 4 знака
FACTOR_SCALE: Final[int] = 4

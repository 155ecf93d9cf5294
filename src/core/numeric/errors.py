"""
Numeric Errors — иерархия ошибок движка десятичной арифметики

Все ошибки движка — единый вид DecimalRangeError (ValueError), конкретная
причина различается подклассом и сообщением:
- InvalidDecimalInput: операнд NaN/Inf или не является безопасным целым
- DecimalOverflow: результат выходит за MAX_SAFE_INTEGER даже после деградации точности
- DecimalDivisionByZero: целочисленное представление делителя равно нулю
- UnsupportedOperator / UnsupportedRoundingMode: неизвестный литерал оператора/режима

Ошибки не повторяются внутри движка (кроме цикла деградации точности в
auto_precision): входные данные и есть причина ошибки.
"""


class DecimalRangeError(ValueError):
    """
    Базовая ошибка диапазона для всех операций движка.

    Вызывающий код перехватывает этот тип и транслирует его в доменную ошибку
    (например, "ошибка расчёта выплаты"), не повторяя арифметику.
    """
    pass


class InvalidDecimalInput(DecimalRangeError):
    """Операнд не конечен (NaN/Inf) или не является безопасным целым."""
    pass


class DecimalOverflow(DecimalRangeError, OverflowError):
    """
    Результат не помещается в безопасный целочисленный диапазон.

    Для auto-путей означает, что все стратегии деградации точности
    (снижение входных scale и out_scale вплоть до 0) исчерпаны.
    """
    pass


class DecimalDivisionByZero(DecimalRangeError, ZeroDivisionError):
    """Делитель (или его целочисленное представление) равен нулю."""
    pass


class UnsupportedOperator(DecimalRangeError):
    """Неизвестный оператор в decimal_compute."""
    pass


class UnsupportedRoundingMode(DecimalRangeError):
    """Неизвестный литерал режима округления."""
    pass

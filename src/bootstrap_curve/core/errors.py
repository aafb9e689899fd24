"""
Errors — таксономия ошибок bonding curve

Каждая ошибка прерывает вызов целиком: состояние кривой, счётчик
легитимной эмиссии и конфигурации остаются такими же, как до вызова.
Внутренних повторов нет.
"""


class BondingCurveError(Exception):
    """Базовая ошибка движка bonding curve."""


class ConfigurationError(BondingCurveError):
    """Невалидные параметры целей (funding goal, average price) или комиссии."""


class StateError(BondingCurveError):
    """
    Вызов в недопустимом состоянии движка.

    - движок заблокирован (locked) или на паузе (paused)
    - цели ещё не заданы (set_goals не вызывался)
    - повторный вход (reentrancy) во время settlement
    """


class CurveArithmeticError(BondingCurveError, ArithmeticError):
    """
    Обязательный положительный результат получился нулевым или отрицательным.

    Примеры: депозит, который не покупает ни одного claim-токена;
    исчерпание виртуального claim leg; нарушение инварианта (x+α)(y+β) ≈ K.
    """


class SlippageError(BondingCurveError):
    """Выход сделки ниже минимума, заданного вызывающим."""


class AuthorizationError(BondingCurveError):
    """Привилегированный вызов не от владельца (или не от pauser)."""


class InsufficientBalanceError(BondingCurveError):
    """У вызывающего или у vault недостаточно средств."""


class InvalidAmountError(BondingCurveError, ValueError):
    """Сумма вызова нулевая, отрицательная или не целое число."""

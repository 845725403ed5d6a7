"""
Errors — таксономия ошибок ledger

Все ошибки прерывают операцию целиком. Частичных изменений состояния нет:
откат выполняет транзакционная обёртка FeeToken, ядро само ничего не откатывает.

Категории:
- authorization: у caller нет нужной роли
- validation: zero address, fee rate выше максимума, некорректный burn lot
- gating: получатель не в whitelist при включённом whitelisting
- arithmetic: overflow/underflow, нарушение инвариантов fee index
"""


class LedgerError(Exception):
    """Базовая ошибка ledger с коротким машинным кодом."""

    code: str = "ledger_error"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class AuthorizationError(LedgerError):
    """Caller не обладает требуемой capability."""

    code = "unauthorized"


class InvalidParameterError(LedgerError, ValueError):
    """Параметр не прошёл валидацию (zero address, rate > max и т.п.)."""

    code = "invalid_parameter"


class TransferGateError(LedgerError):
    """Transfer отклонён whitelist-гейтом."""

    code = "recipient_not_whitelisted"


class InsufficientBalanceError(LedgerError):
    code = "insufficient_balance"


class InsufficientAllowanceError(LedgerError):
    code = "insufficient_allowance"


class FeeArithmeticError(LedgerError, ArithmeticError):
    """
    Overflow/underflow в uint256-арифметике или нарушение инварианта.

    Структурно не должен возникать при соблюдении инвариантов fee index.
    """

    code = "arithmetic"


class ClockRegressionError(LedgerError):
    """Текущий день раньше fees_collection_day."""

    code = "clock_regression"

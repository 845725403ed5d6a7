"""Token — публичный интерфейс fee-decay токена.

- TokenConfig: параметры инициализации (JSON + JSON Schema контракт)
- FeeToken: атомарные операции ledger, fee и администрирования
"""

from .config import TokenConfig, load_token_config
from .fee_token import FeeToken

__all__ = [
    "FeeToken",
    "TokenConfig",
    "load_token_config",
]

"""JSON Schema контракты конфигурации токена и снапшота ledger."""

from .validators import (
    LEDGER_SNAPSHOT,
    SCHEMA_DIR,
    TOKEN_CONFIG,
    ContractValidator,
    LedgerSnapshotValidator,
    SchemaLoader,
    TokenConfigValidator,
    validate_ledger_snapshot,
    validate_token_config,
)

__all__ = [
    "LEDGER_SNAPSHOT",
    "SCHEMA_DIR",
    "TOKEN_CONFIG",
    "SchemaLoader",
    "ContractValidator",
    "TokenConfigValidator",
    "LedgerSnapshotValidator",
    "validate_token_config",
    "validate_ledger_snapshot",
]

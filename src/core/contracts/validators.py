"""
Контракты ledger: token_config и ledger_snapshot.

token_config проверяется до построения pydantic-модели TokenConfig, так что
ошибки формата конфигурации приходят как jsonschema.ValidationError с путём
к полю. ledger_snapshot проверяет экспорт LedgerSnapshot.model_dump(mode="json").

Схемы лежат в contracts/schema/<name>.json и при первой загрузке проходят
meta-validation Draft 2020-12.
"""

import json
from pathlib import Path
from typing import Any, Final

from jsonschema import Draft202012Validator, SchemaError
from jsonschema.exceptions import best_match

SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parents[3] / "contracts" / "schema"

TOKEN_CONFIG: Final = "token_config"
LEDGER_SNAPSHOT: Final = "ledger_snapshot"


class SchemaLoader:
    """Чтение и кэширование схем из каталога контрактов."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: dict[str, dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> dict[str, Any]:
        """
        Raises:
            FileNotFoundError: нет файла <schema_name>.json
            ValueError: файл не является корректной Draft 2020-12 схемой
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"{path.name} is not a valid Draft 2020-12 schema: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_loader: SchemaLoader | None = None


def _shared_loader() -> SchemaLoader:
    global _loader
    if _loader is None:
        _loader = SchemaLoader()
    return _loader


class ContractValidator:
    """Проверка документа против одной схемы; подклассы задают schema_name."""

    schema_name: str = ""

    def __init__(self, loader: SchemaLoader | None = None):
        schema = (loader or _shared_loader()).load_schema(self.schema_name)
        self._validator = Draft202012Validator(schema)

    def validate(self, data: dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: наиболее релевантное нарушение схемы
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: dict[str, Any]) -> bool:
        return self._validator.is_valid(data)


class TokenConfigValidator(ContractValidator):
    schema_name = TOKEN_CONFIG


class LedgerSnapshotValidator(ContractValidator):
    schema_name = LEDGER_SNAPSHOT


def validate_token_config(data: dict[str, Any]) -> None:
    TokenConfigValidator().validate(data)


def validate_ledger_snapshot(data: dict[str, Any]) -> None:
    LedgerSnapshotValidator().validate(data)

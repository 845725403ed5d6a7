"""
TokenConfig — конфигурация развёртывания токена

Immutable Pydantic модель параметров инициализации fee token.
JSON-файлы конфигурации сначала проверяются JSON Schema контрактом
(contracts/schema/token_config.json), затем парсятся в модель.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from src.core.contracts import validate_token_config
from src.core.domain.units import normalize_address, require_non_zero_address
from src.core.math.decay import MAX_FEE_RATE

logger = logging.getLogger(__name__)


class TokenConfig(BaseModel):
    """
    Параметры инициализации токена.

    Immutable модель (frozen=True). Адреса нормализуются в lower case;
    fee recipient и менеджеры не могут быть zero address.
    """

    name: str = Field(default="Fee Decay Token", min_length=1)
    symbol: str = Field(default="FDT", min_length=1)

    fee_rate: int = Field(
        ..., ge=0, le=MAX_FEE_RATE, description="Fee rate (bps за период аннуализации)"
    )
    fee_recipient: str = Field(..., description="Получатель fee")
    fee_rate_manager: str = Field(..., description="Менеджер fee rate")
    whitelist_manager: str = Field(..., description="Менеджер whitelist")
    is_whitelisting: bool = Field(default=False, description="Включён ли whitelist-гейт")
    initial_whitelist: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("fee_recipient", "fee_rate_manager", "whitelist_manager")
    @classmethod
    def validate_role_address(cls, v: str) -> str:
        return require_non_zero_address(v)

    @field_validator("initial_whitelist")
    @classmethod
    def validate_whitelist(cls, v: list[str]) -> list[str]:
        return [normalize_address(account) for account in v]


def load_token_config(path: str | Path) -> TokenConfig:
    """
    Загрузка конфигурации из JSON файла.

    Raises:
        FileNotFoundError: файл не найден
        jsonschema.ValidationError: нарушение контракта token_config
        pydantic.ValidationError: нарушение ограничений модели
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_token_config(data)
    config = TokenConfig.model_validate(data)

    logger.info(
        "Loaded token config from %s: fee_rate=%d, fee_recipient=%s, is_whitelisting=%s",
        path,
        config.fee_rate,
        config.fee_recipient,
        config.is_whitelisting,
    )
    return config

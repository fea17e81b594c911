"""
HelperConfig — конфигурация адресов окружения

Pydantic модель адресной книги одного окружения (development, staging, ...):
ledger (morpho), public allocator, vault, proxy, начальный admin и
именованные market id.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.domain.market import checksum_address, normalize_market_id
from src.core.exceptions import ConfigurationError

DEFAULT_ENVIRONMENT = "development"


class HelperConfig(BaseModel):
    """Адресная книга окружения."""

    environment: str = Field(DEFAULT_ENVIRONMENT, min_length=1)
    chain_id: Optional[int] = Field(None, gt=0)

    morpho: str = Field(..., description="Lending ledger")
    public_allocator: str = Field(..., description="Public reallocation facility")
    initial_admin: str = Field(..., description="Получает ADMIN при инициализации")

    vault: Optional[str] = Field(None, description="Vault по умолчанию")
    proxy: Optional[str] = Field(None, description="Адрес proxy (identity)")
    implementation: Optional[str] = Field(None, description="Текущая реализация")

    markets: Dict[str, str] = Field(default_factory=dict, description="name -> market id")

    model_config = {"frozen": True}

    @field_validator("morpho", "public_allocator", "initial_admin")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return checksum_address(v)

    @field_validator("vault", "proxy", "implementation")
    @classmethod
    def validate_optional_address(cls, v: Optional[str]) -> Optional[str]:
        return checksum_address(v) if v is not None else None

    @field_validator("markets")
    @classmethod
    def validate_markets(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {name: normalize_market_id(market_id) for name, market_id in v.items()}

    def market_id(self, name: str) -> str:
        """
        Market id по имени.

        Raises:
            ConfigurationError: если рынок не сконфигурирован
        """
        try:
            return self.markets[name]
        except KeyError:
            raise ConfigurationError(
                f"market {name!r} is not configured for environment {self.environment!r}"
            ) from None

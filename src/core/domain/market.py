"""
Market — Модели рынка ledger-а

Immutable Pydantic модели:
- MarketParams — полный descriptor рынка (loan, collateral, oracle, irm, lltv)
- MarketState — агрегированное состояние рынка
- PositionState — сырое состояние позиции аккаунта
- MarketBalances — interest-inclusive тоталы рынка (проекция ledger-а)

Market id — keccak256(abi.encode(MarketParams)): пять 32-байтных слов,
адреса выровнены вправо, lltv big-endian. Одинаковые descriptors дают
одинаковый id.
"""

from eth_utils import encode_hex, is_hex, keccak, to_canonical_address, to_checksum_address
from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_point import MAX_UINT128, MAX_UINT256, WAD

# =============================================================================
# ADDRESS / ID HELPERS
# =============================================================================

MARKET_ID_HEX_LENGTH = 66  # "0x" + 32 bytes


def checksum_address(value: str) -> str:
    """
    Нормализация адреса в EIP-55 checksum форму.

    Raises:
        ValueError: Если value не является адресом
    """
    try:
        return to_checksum_address(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid address: {value!r}") from e


def normalize_market_id(value: str) -> str:
    """
    Нормализация market id: lowercase 0x-prefixed 32-byte hex.

    Raises:
        ValueError: Если value не 32-байтный hex
    """
    if not isinstance(value, str) or not is_hex(value):
        raise ValueError(f"market id must be a hex string, got {value!r}")

    normalized = value.lower()
    if not normalized.startswith("0x"):
        normalized = "0x" + normalized

    if len(normalized) != MARKET_ID_HEX_LENGTH:
        raise ValueError(f"market id must be 32 bytes, got {value!r}")

    return normalized


def _word(value: bytes) -> bytes:
    return value.rjust(32, b"\x00")


# =============================================================================
# MARKET PARAMS
# =============================================================================


class MarketParams(BaseModel):
    """
    Descriptor рынка — полный кортеж параметров.

    Immutable после создания рынка в ledger-е. Канонический ключ — id.
    """

    loan_token: str = Field(..., description="Loan asset")
    collateral_token: str = Field(..., description="Collateral asset")
    oracle: str = Field(..., description="Oracle (нулевой адрес — без oracle)")
    irm: str = Field(..., description="Interest rate model (нулевой адрес — без IRM)")
    lltv: int = Field(..., ge=0, le=WAD, description="Liquidation LTV (WAD)")

    model_config = {"frozen": True}

    @field_validator("loan_token", "collateral_token", "oracle", "irm")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return checksum_address(v)

    def abi_encode(self) -> bytes:
        """abi.encode(loan, collateral, oracle, irm, lltv) — 160 байт."""
        addresses = (self.loan_token, self.collateral_token, self.oracle, self.irm)
        encoded = b"".join(_word(to_canonical_address(a)) for a in addresses)
        return encoded + self.lltv.to_bytes(32, "big")

    @property
    def id(self) -> str:
        """Market id = keccak256(abi.encode(params))."""
        return market_id_for(self)


def market_id_for(params: MarketParams) -> str:
    """
    Детерминированный digest descriptor-а.

    Returns:
        0x-prefixed lowercase hex (32 байта)
    """
    return encode_hex(keccak(params.abi_encode()))


# =============================================================================
# LEDGER STATE
# =============================================================================


class MarketState(BaseModel):
    """Агрегированное состояние рынка (как хранит ledger)."""

    total_supply_assets: int = Field(..., ge=0, le=MAX_UINT128)
    total_supply_shares: int = Field(..., ge=0, le=MAX_UINT128)
    total_borrow_assets: int = Field(..., ge=0, le=MAX_UINT128)
    total_borrow_shares: int = Field(..., ge=0, le=MAX_UINT128)
    last_update: int = Field(0, ge=0, description="Timestamp последнего начисления")
    fee: int = Field(0, ge=0, le=WAD, description="Доля процентов протокола (WAD)")

    model_config = {"frozen": True}


class PositionState(BaseModel):
    """Сырое состояние позиции аккаунта в рынке (shares + collateral)."""

    supply_shares: int = Field(0, ge=0, le=MAX_UINT256)
    borrow_shares: int = Field(0, ge=0, le=MAX_UINT128)
    collateral: int = Field(0, ge=0, le=MAX_UINT128)

    model_config = {"frozen": True}


class MarketBalances(BaseModel):
    """Тоталы рынка с учётом ещё не начисленных процентов."""

    total_supply_assets: int = Field(..., ge=0)
    total_supply_shares: int = Field(..., ge=0)
    total_borrow_assets: int = Field(..., ge=0)
    total_borrow_shares: int = Field(..., ge=0)

    model_config = {"frozen": True}

"""
Contract Module

- JSON Schema валидация документов состояния и снапшотов
- Протоколы внешних контрактов (ledger, vault, facility, oracle, IRM)
"""

from .interfaces import (
    FacilityClient,
    FacilityFactory,
    LedgerClient,
    LedgerFactory,
    Oracle,
    OracleFactory,
    RateModel,
    RateModelFactory,
    VaultClient,
    VaultFactory,
)
from .validators import (
    ContractValidator,
    HelperStateValidator,
    MarketDataValidator,
    PositionDataValidator,
    SchemaLoader,
    validate_helper_state,
    validate_market_data,
    validate_position_data,
)

__all__ = [
    # Validators
    "SchemaLoader",
    "ContractValidator",
    "HelperStateValidator",
    "MarketDataValidator",
    "PositionDataValidator",
    "validate_helper_state",
    "validate_market_data",
    "validate_position_data",
    # External interfaces
    "LedgerClient",
    "VaultClient",
    "FacilityClient",
    "Oracle",
    "RateModel",
    "LedgerFactory",
    "VaultFactory",
    "FacilityFactory",
    "OracleFactory",
    "RateModelFactory",
]

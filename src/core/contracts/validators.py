"""
Контракты документов morpho-helper (JSON Schema, Draft 2020-12)

Схемы лежат рядом с модулем в schema/ и поставляются как package data:
- helper_state — персистентное состояние (переживает upgrade реализации)
- market_data — снапшот рынка из Analytics Reader
- position_data — снапшот позиции из Analytics Reader

Суммы и WAD-доли в документах — целые JSON numbers без ограничения
разрядности (uint256 помещается, float отклоняется).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).parent / "schema"

HELPER_STATE = "helper_state"
MARKET_DATA = "market_data"
POSITION_DATA = "position_data"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-валидация схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без .json (кэшируется на экземпляр).

        Raises:
            FileNotFoundError: нет файла {schema_name}.json
            ValueError: файл не проходит meta-валидацию Draft 2020-12
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
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_DEFAULT_LOADER = SchemaLoader()


@lru_cache(maxsize=None)
def _compiled(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(_DEFAULT_LOADER.load_schema(schema_name))


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Обёртка над скомпилированной схемой одного контракта."""

    schema_name: str = ""

    def __init__(self, schema_name: str | None = None):
        if schema_name is not None:
            self.schema_name = schema_name
        self.validator = _compiled(self.schema_name)
        self.schema = self.validator.schema

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: первое (наиболее релевантное) нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения в виде "path: message" (для логов и ConfigurationError)."""
        return [
            f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
            for error in sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        ]


class HelperStateValidator(ContractValidator):
    schema_name = HELPER_STATE


class MarketDataValidator(ContractValidator):
    schema_name = MARKET_DATA


class PositionDataValidator(ContractValidator):
    schema_name = POSITION_DATA


# =============================================================================
# SHORTCUTS
# =============================================================================


def validate_helper_state(data: Dict[str, Any]) -> None:
    HelperStateValidator().validate(data)


def validate_market_data(data: Dict[str, Any]) -> None:
    MarketDataValidator().validate(data)


def validate_position_data(data: Dict[str, Any]) -> None:
    PositionDataValidator().validate(data)

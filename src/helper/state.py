"""
HelperState — персистентное состояние helper-а

Единственное состояние, которое переживает вызовы и смену реализации:
- адрес ledger-а (morpho) и public allocator
- текущая реализация и история upgrade-ов
- назначения ролей

Документ состояния валидируется JSON Schema (helper_state) на экспорте
и на восстановлении.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.core.contracts.validators import HelperStateValidator, validate_helper_state
from src.core.domain.market import checksum_address
from src.core.exceptions import ConfigurationError
from src.gatekeeper.roles import Role

STATE_SCHEMA_VERSION = "1"


class HelperState(BaseModel):
    schema_version: Literal["1"] = STATE_SCHEMA_VERSION

    morpho: str
    public_allocator: str
    implementation: Optional[str] = None
    implementation_history: List[str] = Field(default_factory=list)

    roles: Dict[str, List[str]] = Field(
        default_factory=lambda: {role.value: [] for role in Role}
    )

    model_config = {"frozen": True}

    @field_validator("morpho", "public_allocator")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return checksum_address(v)

    @field_validator("implementation")
    @classmethod
    def validate_implementation(cls, v: Optional[str]) -> Optional[str]:
        return checksum_address(v) if v is not None else None

    @field_validator("implementation_history")
    @classmethod
    def validate_history(cls, v: List[str]) -> List[str]:
        return [checksum_address(a) for a in v]

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        roles = {role.value: [] for role in Role}
        for name, accounts in v.items():
            # Role(name) отклоняет неизвестные роли
            roles[Role(name).value] = sorted({checksum_address(a) for a in accounts})
        return roles

    def to_document(self) -> Dict[str, Any]:
        """JSON-документ состояния (валидирован по схеме)."""
        document = self.model_dump()
        validate_helper_state(document)
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "HelperState":
        """
        Восстановление состояния из документа.

        Raises:
            ConfigurationError: документ не соответствует схеме или модели
        """
        violations = HelperStateValidator().error_messages(document)
        if violations:
            raise ConfigurationError(
                "Invalid helper state document: " + "; ".join(violations)
            )

        try:
            return cls(**document)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid helper state document: {e}") from e

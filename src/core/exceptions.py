"""
Иерархия исключений morpho-helper.

Разделяет:
- AuthorizationError — вызывающий не имеет нужной роли (до любых side effects)
- ExternalCallError — отказ внешнего контракта (ledger/vault/facility/oracle/IRM)
- ConfigurationError — невалидная конфигурация или документ состояния

Ядро не ретраит и не оборачивает ошибки внешних вызовов: они пропагируют
к вызывающему без изменений.
"""

from typing import Optional


class HelperError(Exception):
    """Базовый класс всех исключений morpho-helper."""


class AuthorizationError(HelperError):
    """
    Вызывающий не удовлетворяет требуемой роли.

    Поднимается до любого чтения или записи, состояние не меняется.
    """

    def __init__(self, role: str, account: str, reason: Optional[str] = None):
        self.role = role
        self.account = account
        message = f"account {account} is missing role {role}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExternalCallError(HelperError):
    """
    Внешний контракт отклонил вызов или недоступен.

    Поднимается реализациями клиентов (ledger, vault, facility, oracle, IRM).
    """

    def __init__(self, target: str, operation: str, reason: str):
        self.target = target
        self.operation = operation
        self.reason = reason
        super().__init__(f"{target}.{operation} failed: {reason}")


class ConfigurationError(HelperError):
    """Невалидная конфигурация адресов или документ состояния."""

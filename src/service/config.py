"""
ServiceConfig — Конфигурация coordination service

Base URL каждого endpoint инжектируется конфигурацией, а не зашит в код:
одно и то же ядро может работать с любым совместимым инстансом сервиса.

Параметры вызова (sender, safe, to, value, private key) сюда не входят.
"""

import os
from typing import Final, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_TRANSACTION_SERVICE_URL: Final[str] = "https://safe-transaction.rinkeby.gnosis.io/api/v1"
DEFAULT_RELAY_SERVICE_URL: Final[str] = "https://safe-relay.rinkeby.gnosis.io/api/v2"

ENV_TRANSACTION_SERVICE_URL: Final[str] = "SAFE_TRANSACTION_SERVICE_URL"
ENV_RELAY_SERVICE_URL: Final[str] = "SAFE_RELAY_SERVICE_URL"
ENV_CHAIN_ID: Final[str] = "SAFE_CHAIN_ID"
ENV_HTTP_TIMEOUT_S: Final[str] = "SAFE_HTTP_TIMEOUT_S"
ENV_PROPOSAL_ORIGIN: Final[str] = "SAFE_PROPOSAL_ORIGIN"


# =============================================================================
# CONFIG MODEL
# =============================================================================


class ServiceConfig(BaseModel):
    """
    Адреса и параметры coordination service.

    Immutable модель (frozen=True).
    """

    transaction_service_url: str = Field(
        DEFAULT_TRANSACTION_SERVICE_URL,
        min_length=1,
        description="Base URL transaction service (GET safe, POST proposal)",
    )
    relay_service_url: str = Field(
        DEFAULT_RELAY_SERVICE_URL,
        min_length=1,
        description="Base URL relay service (POST estimate)",
    )
    chain_id: Optional[int] = Field(
        None, gt=0, description="chainId домена EIP-712 (None — домен без chainId)"
    )
    timeout_s: Optional[float] = Field(
        None, gt=0, description="HTTP таймаут (None — без таймаута)"
    )
    origin: Optional[str] = Field(None, description="Поле origin в proposal")

    model_config = {"frozen": True}

    @field_validator("transaction_service_url", "relay_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        return v[:-1] if v.endswith("/") else v

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """
        Конфигурация из переменных окружения.

        Пустые и отсутствующие переменные → значения по умолчанию.

        Raises:
            pydantic.ValidationError: Если значение переменной некорректно
        """
        values = {
            "transaction_service_url": (os.getenv(ENV_TRANSACTION_SERVICE_URL) or "").strip()
            or DEFAULT_TRANSACTION_SERVICE_URL,
            "relay_service_url": (os.getenv(ENV_RELAY_SERVICE_URL) or "").strip()
            or DEFAULT_RELAY_SERVICE_URL,
            "chain_id": (os.getenv(ENV_CHAIN_ID) or "").strip() or None,
            "timeout_s": (os.getenv(ENV_HTTP_TIMEOUT_S) or "").strip() or None,
            "origin": (os.getenv(ENV_PROPOSAL_ORIGIN) or "").strip() or None,
        }
        return cls.model_validate(values)

"""
SafeAccount — Снапшот состояния Safe аккаунта

Immutable Pydantic модель ответа GET /safes/{account}.
Полная совместимость с JSON Schema (contracts/schema/safe_info.json).

Снапшот запрашивается заново для каждого proposal и никогда не кэшируется:
nonce, попадающий в digest, должен быть получен непосредственно перед подписью.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .addresses import normalize_address
from .units import UINT256_MAX


class SafeAccount(BaseModel):
    """
    Состояние Safe аккаунта.

    Используется только nonce; остальные поля сохраняются для диагностики.
    """

    address: str = Field(..., description="Адрес Safe")
    nonce: int = Field(..., ge=0, le=UINT256_MAX, description="Текущий sequencing counter")
    threshold: Optional[int] = Field(None, ge=0, description="Порог подписей")
    owners: List[str] = Field(default_factory=list, description="Владельцы Safe")
    master_copy: Optional[str] = Field(None, alias="masterCopy")
    modules: List[str] = Field(default_factory=list)
    fallback_handler: Optional[str] = Field(None, alias="fallbackHandler")
    guard: Optional[str] = Field(None)
    version: Optional[str] = Field(None, description="Версия контракта Safe")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Checksum нормализация адреса Safe"""
        return normalize_address(v)

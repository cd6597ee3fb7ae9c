"""
CandidateCall — Вызов, предлагаемый к исполнению через Safe

Immutable Pydantic модель, строится один раз на вызов из параметров
вызывающего. Operation всегда CALL: delegate call в этом ядре не поддерживается.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .addresses import normalize_address
from .units import UINT256_MAX


# =============================================================================
# ENUMS
# =============================================================================


class Operation(IntEnum):
    """Тип операции Safe (uint8 в SafeTx)."""

    CALL = 0


# =============================================================================
# CANDIDATE CALL MODEL
# =============================================================================


class CandidateCall(BaseModel):
    """
    Вызов от имени Safe.

    Immutable модель (frozen=True).
    """

    to: str = Field(..., description="Адрес получателя")
    value: int = Field(..., ge=0, le=UINT256_MAX, description="Сумма в wei")
    data: Optional[bytes] = Field(None, description="Call-data (None = пустой вызов)")
    operation: Operation = Field(Operation.CALL, description="Всегда CALL")
    gas_token: Optional[str] = Field(None, description="Override gas token (None = ZERO_ADDRESS)")

    model_config = {"frozen": True}

    @field_validator("to")
    @classmethod
    def validate_to(cls, v: str) -> str:
        return normalize_address(v)

    @field_validator("gas_token")
    @classmethod
    def validate_gas_token(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return normalize_address(v)

    def data_bytes(self) -> bytes:
        """Call-data для хэширования (None → b"")."""
        return self.data or b""

    def data_hex(self) -> Optional[str]:
        """Call-data для JSON (None остаётся null)."""
        if self.data is None:
            return None
        return "0x" + self.data.hex()

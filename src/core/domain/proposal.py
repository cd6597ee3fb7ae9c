"""
TransactionProposal — Подписанный proposal для coordination service

Immutable Pydantic модель. Полностью определена до отправки; JSON
представление (to_payload) совместимо с
contracts/schema/multisig_transaction.json.

ИНВАРИАНТЫ:
1. operation == CALL
2. gas_price == 0, base_gas == 0
3. gas_token и refund_receiver == ZERO_ADDRESS, если не переопределены
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .addresses import ZERO_ADDRESS, normalize_address
from .call import Operation
from .units import UINT256_MAX


class TransactionProposal(BaseModel):
    """
    Proposal multisig транзакции.

    Порядок полей совпадает с порядком полей JSON запроса.
    """

    safe: str = Field(..., exclude=True, description="Адрес Safe (часть URL, не тела)")

    to: str = Field(...)
    value: int = Field(..., ge=0, le=UINT256_MAX)
    data: Optional[str] = Field(None, description="Call-data hex или null")
    operation: Operation = Field(Operation.CALL)
    gas_token: str = Field(ZERO_ADDRESS, alias="gasToken")
    safe_tx_gas: int = Field(..., ge=0, le=UINT256_MAX, alias="safeTxGas")
    base_gas: int = Field(0, ge=0, le=UINT256_MAX, alias="baseGas")
    gas_price: int = Field(0, ge=0, le=UINT256_MAX, alias="gasPrice")
    refund_receiver: str = Field(ZERO_ADDRESS, alias="refundReceiver")
    nonce: int = Field(..., ge=0, le=UINT256_MAX)
    contract_transaction_hash: str = Field(
        ..., pattern="^0x[0-9a-f]{64}$", alias="contractTransactionHash"
    )
    sender: str = Field(...)
    signature: str = Field(..., pattern="^0x[0-9a-f]{130}$")
    origin: Optional[str] = Field(None)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("safe", "to", "gas_token", "refund_receiver", "sender")
    @classmethod
    def validate_addresses(cls, v: str) -> str:
        return normalize_address(v)

    def to_payload(self) -> Dict[str, Any]:
        """JSON тело POST /safes/{account}/multisig-transactions/."""
        return self.model_dump(by_alias=True, mode="json")

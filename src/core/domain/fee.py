"""
FeeEstimate — Оценка газа для SafeTx

Immutable Pydantic модель ответа relay service на
POST /safes/{account}/transactions/estimate/.

Downstream используется только safe_tx_gas; остальные компоненты сохраняются
в том виде, в каком их вернул сервис.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .units import UINT256_MAX


class FeeEstimate(BaseModel):
    """Оценка стоимости исполнения вызова."""

    safe_tx_gas: int = Field(..., ge=0, le=UINT256_MAX, description="Газ на исполнение (распарсен из строки)")

    # Вспомогательные компоненты (сырые строки сервиса)
    base_gas: Optional[str] = Field(None, description="baseGas")
    data_gas: Optional[str] = Field(None, description="dataGas")
    operational_gas: Optional[str] = Field(None, description="operationalGas")
    gas_price: Optional[str] = Field(None, description="gasPrice")
    last_used_nonce: Optional[int] = Field(None, description="lastUsedNonce")
    gas_token: Optional[str] = Field(None, description="gasToken")
    refund_receiver: Optional[str] = Field(None, description="refundReceiver")

    model_config = {"frozen": True}

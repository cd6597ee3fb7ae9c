"""
SafeTx Digest — Authorization digest для multisig proposal

Digest = keccak256(DIGEST_PREFIX ‖ hash_struct(EIP712Domain) ‖ hash_struct(SafeTx))

DIGEST_PREFIX — два байта 0x01 0x13. Это ровно те байты, которые ожидает
coordination service при независимом пересчёте хэша; канонический для EIP-712
префикс 0x19 0x01 здесь НЕ используется. Менять префикс можно только вместе
с целевым сервисом.

Domain:
- EIP712Domain(address verifyingContract)
- EIP712Domain(uint256 chainId,address verifyingContract), если задан chain_id
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Final, List, Optional

from eth_utils import keccak

from src.core.crypto.typed_data import TypedField, hash_struct
from src.core.domain.addresses import ZERO_ADDRESS, normalize_address
from src.core.domain.call import CandidateCall

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ СХЕМЫ
# =============================================================================

DIGEST_PREFIX: Final[bytes] = bytes([0x01, 0x13])

EIP712_DOMAIN_TYPE: Final[str] = "EIP712Domain"
SAFE_TX_TYPE: Final[str] = "SafeTx"

SAFE_TX_FIELDS: Final[List[TypedField]] = [
    ("to", "address"),
    ("value", "uint256"),
    ("data", "bytes"),
    ("operation", "uint8"),
    ("safeTxGas", "uint256"),
    ("baseGas", "uint256"),
    ("gasPrice", "uint256"),
    ("gasToken", "address"),
    ("refundReceiver", "address"),
    ("nonce", "uint256"),
]


def safe_tx_types(chain_id: Optional[int] = None) -> Dict[str, List[TypedField]]:
    """Схема типов SafeTx + EIP712Domain."""
    domain_fields: List[TypedField] = [("verifyingContract", "address")]
    if chain_id is not None:
        domain_fields = [("chainId", "uint256")] + domain_fields
    return {
        EIP712_DOMAIN_TYPE: domain_fields,
        SAFE_TX_TYPE: list(SAFE_TX_FIELDS),
    }


# =============================================================================
# DIGEST
# =============================================================================


@dataclass(frozen=True)
class SafeTxDigest:
    """Результат построения digest."""

    domain_hash: bytes
    message_hash: bytes
    digest: bytes

    def hex(self) -> str:
        """0x-hex digest (contractTransactionHash)."""
        return "0x" + self.digest.hex()


def combine_digest(domain_hash: bytes, message_hash: bytes, prefix: bytes = DIGEST_PREFIX) -> bytes:
    """keccak256(prefix ‖ domain_hash ‖ message_hash)"""
    if len(domain_hash) != 32 or len(message_hash) != 32:
        raise ValueError("domain_hash and message_hash must be 32 bytes")
    return keccak(prefix + domain_hash + message_hash)


class SafeTxDigestBuilder:
    """
    Построитель authorization digest.

    Stateless: не хранит ничего между вызовами, кроме конфигурации домена.
    """

    def __init__(self, chain_id: Optional[int] = None, prefix: bytes = DIGEST_PREFIX):
        """
        Args:
            chain_id: chainId домена (None — домен только с verifyingContract)
            prefix: Префикс финального хэша (должен совпадать с сервисом)
        """
        if len(prefix) != 2:
            raise ValueError(f"prefix must be 2 bytes, got {len(prefix)}")
        self.chain_id = chain_id
        self.prefix = prefix
        self.types = safe_tx_types(chain_id)

    def domain(self, safe: str) -> Dict[str, Any]:
        """Значения EIP712Domain для Safe."""
        values: Dict[str, Any] = {"verifyingContract": normalize_address(safe)}
        if self.chain_id is not None:
            values["chainId"] = self.chain_id
        return values

    def message(
        self,
        call: CandidateCall,
        safe_tx_gas: int,
        nonce: int,
        base_gas: int = 0,
        gas_price: int = 0,
        refund_receiver: str = ZERO_ADDRESS,
    ) -> Dict[str, Any]:
        """Значения SafeTx."""
        return {
            "to": call.to,
            "value": call.value,
            "data": call.data_bytes(),
            "operation": int(call.operation),
            "safeTxGas": safe_tx_gas,
            "baseGas": base_gas,
            "gasPrice": gas_price,
            "gasToken": call.gas_token or ZERO_ADDRESS,
            "refundReceiver": refund_receiver,
            "nonce": nonce,
        }

    def build(self, safe: str, call: CandidateCall, safe_tx_gas: int, nonce: int) -> SafeTxDigest:
        """
        Построение digest для (safe, call, safe_tx_gas, nonce).

        Args:
            safe: Адрес Safe (verifyingContract)
            call: Предлагаемый вызов
            safe_tx_gas: Оценка газа от relay service
            nonce: Nonce Safe, полученный в этом же вызове

        Returns:
            SafeTxDigest
        """
        domain_hash = hash_struct(EIP712_DOMAIN_TYPE, self.types, self.domain(safe))
        message_hash = hash_struct(
            SAFE_TX_TYPE, self.types, self.message(call, safe_tx_gas, nonce)
        )
        digest = combine_digest(domain_hash, message_hash, self.prefix)

        logger.debug(
            "SafeTx digest: domain=0x%s message=0x%s digest=0x%s",
            domain_hash.hex(),
            message_hash.hex(),
            digest.hex(),
        )
        return SafeTxDigest(domain_hash=domain_hash, message_hash=message_hash, digest=digest)

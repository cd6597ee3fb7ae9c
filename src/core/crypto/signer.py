"""
Signer — Recoverable ECDSA подпись digest

Подпись: r ‖ s ‖ v (65 байт). v нормализуется к {27, 28}:
recovery id 0/1 → +27, любое другое значение проходит без изменений.

Digest подписывается как есть, без "\\x19Ethereum Signed Message" префикса.
"""

from dataclasses import dataclass
from typing import Final, Union

from eth_keys import keys
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import ValidationError as EthUtilsValidationError
from eth_utils import decode_hex

from src.core.errors import SigningError


# Смещение v для conventional signed-message recovery
RECOVERY_ID_OFFSET: Final[int] = 27

DIGEST_LENGTH: Final[int] = 32


def normalize_recovery_id(v: int) -> int:
    """
    Нормализация recovery id.

    Examples:
        >>> normalize_recovery_id(0)
        27
        >>> normalize_recovery_id(1)
        28
        >>> normalize_recovery_id(28)
        28
    """
    if v in (0, 1):
        return v + RECOVERY_ID_OFFSET
    return v


@dataclass(frozen=True)
class Signature:
    """(r, s, v) с уже нормализованным v."""

    r: int
    s: int
    v: int

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v])

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def load_private_key(private_key: Union[str, bytes]) -> keys.PrivateKey:
    """
    Разбор приватного ключа (hex строка с/без 0x или 32 байта).

    Raises:
        SigningError: Если ключ некорректен
    """
    try:
        key_bytes = decode_hex(private_key) if isinstance(private_key, str) else bytes(private_key)
        return keys.PrivateKey(key_bytes)
    except (ValueError, TypeError, KeyValidationError, EthUtilsValidationError) as e:
        # Сообщение не должно содержать ключ
        raise SigningError("Malformed private key") from e


def address_of(private_key: Union[str, bytes]) -> str:
    """Checksum адрес, соответствующий ключу."""
    return load_private_key(private_key).public_key.to_checksum_address()


def sign_digest(digest: bytes, private_key: Union[str, bytes]) -> Signature:
    """
    Подпись 32-байтового digest.

    Детерминирована (RFC 6979): одинаковые (digest, key) дают одинаковую подпись.

    Args:
        digest: 32 байта authorization digest
        private_key: Приватный ключ подписанта

    Returns:
        Signature с v ∈ {27, 28}

    Raises:
        SigningError: Некорректный ключ или длина digest
    """
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != DIGEST_LENGTH:
        raise SigningError(f"Digest must be {DIGEST_LENGTH} bytes")

    key = load_private_key(private_key)
    try:
        raw = key.sign_msg_hash(bytes(digest))
    except (ValueError, KeyValidationError, EthUtilsValidationError) as e:
        raise SigningError(f"Signing failed: {e}") from e

    return Signature(r=raw.r, s=raw.s, v=normalize_recovery_id(raw.v))

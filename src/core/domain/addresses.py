"""
Addresses — Адресные константы и нормализация

Единственное определение zero-address sentinel. Все потребители (gasToken,
refundReceiver, тесты) используют ZERO_ADDRESS из этого модуля.
"""

from typing import Final

from eth_utils import is_address, to_checksum_address


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Zero-address sentinel: "нет gas token" / "refund получает tx.origin"
ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def normalize_address(value: str) -> str:
    """
    Приведение адреса к EIP-55 checksum форме.

    Args:
        value: Адрес в hex (любой регистр, с префиксом 0x)

    Returns:
        Checksum адрес

    Raises:
        ValueError: Если значение не является 20-байтовым hex адресом
    """
    if not isinstance(value, str) or not is_address(value):
        raise ValueError(f"Invalid address: {value!r}")
    return to_checksum_address(value)

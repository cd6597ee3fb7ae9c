"""
Тесты для SafeTx Digest

Проверяемые инварианты:
1. Схема SafeTx совпадает с известным SAFE_TX_TYPEHASH
2. Domain без chainId / с chainId
3. Digest = keccak(0x01 0x13 ‖ domain ‖ message), а не 0x19 0x01
4. Результат совпадает с явным ABI-кодированием полей
   и с зафиксированным hex для nonce=5, safeTxGas=21000, value=1000000
5. Детерминизм и чувствительность к nonce/safeTxGas/value
"""

import pytest
from eth_abi import encode
from eth_utils import keccak

from src.core.crypto.safe_tx import (
    DIGEST_PREFIX,
    EIP712_DOMAIN_TYPE,
    SAFE_TX_TYPE,
    SafeTxDigestBuilder,
    combine_digest,
    safe_tx_types,
)
from src.core.crypto.typed_data import encode_type, type_hash
from src.core.domain import ZERO_ADDRESS, CandidateCall


SAFE = "0x1111111111111111111111111111111111111111"
DESTINATION = "0x2222222222222222222222222222222222222222"

SAFE_TX_TYPEHASH = "bb8310d486368db6bd6f849402fdd73ad53d316b5a4b2644ad6efe0f941286d8"
CHAIN_DOMAIN_TYPEHASH = "47e79534a245952e8b16893a336b85a3d9ea9fa8c573f3d803afb92a79469218"

# SafeTx(to=DESTINATION, value=1000000, safeTxGas=21000, nonce=5) для SAFE, без chainId
REFERENCE_DOMAIN_HASH = "c6172c436a72ad7286cf5e21dcc39bf417e7f8a6404b5f0f1c25c6a30b44831c"
REFERENCE_MESSAGE_HASH = "ef430e6293ec8f38f175cca9f0f8301492b4d3a0e527cc59cd9f2dd633407dac"
REFERENCE_DIGEST = "0x4a24b1eb19be6f4ea1066a122dfaf28bf4cff86184d0f215664d67822e10a88d"


@pytest.fixture
def call():
    return CandidateCall(to=DESTINATION, value=1_000_000)


def explicit_message_hash(to: str, value: int, safe_tx_gas: int, nonce: int) -> bytes:
    """SafeTx hash через прямое ABI кодирование, без typed-data схемы."""
    return keccak(
        encode(
            [
                "bytes32", "address", "uint256", "bytes32", "uint8",
                "uint256", "uint256", "uint256", "address", "address", "uint256",
            ],
            [
                bytes.fromhex(SAFE_TX_TYPEHASH),
                to,
                value,
                keccak(b""),
                0,
                safe_tx_gas,
                0,
                0,
                ZERO_ADDRESS,
                ZERO_ADDRESS,
                nonce,
            ],
        )
    )


# =============================================================================
# ТЕСТЫ: Schema
# =============================================================================


class TestSafeTxSchema:
    """Схема типов SafeTx / EIP712Domain."""

    def test_safe_tx_type_string(self):
        assert encode_type(SAFE_TX_TYPE, safe_tx_types()) == (
            "SafeTx(address to,uint256 value,bytes data,uint8 operation,uint256 safeTxGas,"
            "uint256 baseGas,uint256 gasPrice,address gasToken,address refundReceiver,uint256 nonce)"
        )

    def test_safe_tx_type_hash(self):
        assert type_hash(SAFE_TX_TYPE, safe_tx_types()).hex() == SAFE_TX_TYPEHASH

    def test_domain_without_chain_id(self):
        assert encode_type(EIP712_DOMAIN_TYPE, safe_tx_types()) == "EIP712Domain(address verifyingContract)"

    def test_domain_with_chain_id(self):
        types = safe_tx_types(chain_id=4)
        assert encode_type(EIP712_DOMAIN_TYPE, types) == (
            "EIP712Domain(uint256 chainId,address verifyingContract)"
        )
        assert type_hash(EIP712_DOMAIN_TYPE, types).hex() == CHAIN_DOMAIN_TYPEHASH


# =============================================================================
# ТЕСТЫ: Digest
# =============================================================================


class TestSafeTxDigestBuilder:
    """Построение authorization digest."""

    def test_prefix_bytes(self):
        """Префикс — ровно 0x01 0x13."""
        assert DIGEST_PREFIX == b"\x01\x13"

    def test_message_hash_matches_explicit_encoding(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.message_hash == explicit_message_hash(DESTINATION, 1_000_000, 21000, 5)

    def test_domain_hash_matches_explicit_encoding(self, call):
        domain_typehash = keccak(text="EIP712Domain(address verifyingContract)")
        expected = keccak(encode(["bytes32", "address"], [domain_typehash, SAFE]))

        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.domain_hash == expected

    def test_domain_hash_with_chain_id(self, call):
        expected = keccak(
            encode(
                ["bytes32", "uint256", "address"],
                [bytes.fromhex(CHAIN_DOMAIN_TYPEHASH), 137, SAFE],
            )
        )
        result = SafeTxDigestBuilder(chain_id=137).build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.domain_hash == expected

    def test_digest_uses_fixed_prefix(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.digest == keccak(b"\x01\x13" + result.domain_hash + result.message_hash)
        assert result.digest != keccak(b"\x19\x01" + result.domain_hash + result.message_hash)

    def test_custom_prefix(self, call):
        builder = SafeTxDigestBuilder(prefix=b"\x19\x01")
        result = builder.build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.digest == keccak(b"\x19\x01" + result.domain_hash + result.message_hash)

    def test_invalid_prefix_length(self):
        with pytest.raises(ValueError):
            SafeTxDigestBuilder(prefix=b"\x19")

    def test_hex_format(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        hex_digest = result.hex()
        assert hex_digest.startswith("0x")
        assert len(hex_digest) == 66
        assert hex_digest == hex_digest.lower()

    def test_message_defaults(self, call):
        """gasToken/refundReceiver = ZERO_ADDRESS, baseGas/gasPrice = 0, data = b""."""
        message = SafeTxDigestBuilder().message(call, safe_tx_gas=21000, nonce=5)
        assert message["gasToken"] == ZERO_ADDRESS
        assert message["refundReceiver"] == ZERO_ADDRESS
        assert message["baseGas"] == 0
        assert message["gasPrice"] == 0
        assert message["data"] == b""
        assert message["operation"] == 0

    def test_combine_digest_rejects_short_hashes(self):
        with pytest.raises(ValueError):
            combine_digest(b"\x00" * 31, b"\x00" * 32)


# =============================================================================
# ТЕСТЫ: Reference vector
# =============================================================================


class TestReferenceVector:
    """Зафиксированные значения для nonce=5, safeTxGas=21000, value=1000000."""

    def test_domain_hash(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.domain_hash.hex() == REFERENCE_DOMAIN_HASH

    def test_message_hash(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.message_hash.hex() == REFERENCE_MESSAGE_HASH

    def test_digest(self, call):
        result = SafeTxDigestBuilder().build(SAFE, call, safe_tx_gas=21000, nonce=5)
        assert result.hex() == REFERENCE_DIGEST


# =============================================================================
# ТЕСТЫ: Determinism
# =============================================================================


class TestDigestDeterminism:
    """Digest — детерминированная функция входов."""

    def test_identical_inputs_identical_digest(self, call):
        builder = SafeTxDigestBuilder()
        digests = {builder.build(SAFE, call, 21000, 5).digest for _ in range(5)}
        assert len(digests) == 1

    def test_fresh_builder_same_digest(self, call):
        first = SafeTxDigestBuilder().build(SAFE, call, 21000, 5)
        second = SafeTxDigestBuilder().build(SAFE, call, 21000, 5)
        assert first == second

    def test_address_case_does_not_change_digest(self):
        lower = CandidateCall(to="0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826", value=1)
        checksum = CandidateCall(to="0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826", value=1)
        builder = SafeTxDigestBuilder()
        assert builder.build(SAFE, lower, 1, 1).digest == builder.build(SAFE, checksum, 1, 1).digest

    @pytest.mark.parametrize(
        "changed",
        [
            {"nonce": 6},
            {"safe_tx_gas": 21001},
        ],
    )
    def test_any_input_change_changes_digest(self, call, changed):
        builder = SafeTxDigestBuilder()
        base = {"safe_tx_gas": 21000, "nonce": 5}
        assert builder.build(SAFE, call, **base).digest != builder.build(SAFE, call, **{**base, **changed}).digest

    def test_value_change_changes_digest(self, call):
        builder = SafeTxDigestBuilder()
        other = CandidateCall(to=DESTINATION, value=1_000_001)
        assert builder.build(SAFE, call, 21000, 5).digest != builder.build(SAFE, other, 21000, 5).digest

    def test_safe_change_changes_digest(self, call):
        builder = SafeTxDigestBuilder()
        other_safe = "0x4444444444444444444444444444444444444444"
        assert builder.build(SAFE, call, 21000, 5).digest != builder.build(other_safe, call, 21000, 5).digest

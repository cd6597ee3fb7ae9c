"""
Crypto primitives для SafeTx

Typed-data хэширование, authorization digest и подпись.
"""

# Typed Data (EIP-712 struct hashing)
from src.core.crypto.typed_data import (
    TypedField,
    TypeSchema,
    encode_data,
    encode_field,
    encode_type,
    find_dependencies,
    hash_struct,
    type_hash,
)

# SafeTx digest
from src.core.crypto.safe_tx import (
    DIGEST_PREFIX,
    EIP712_DOMAIN_TYPE,
    SAFE_TX_FIELDS,
    SAFE_TX_TYPE,
    SafeTxDigest,
    SafeTxDigestBuilder,
    combine_digest,
    safe_tx_types,
)

# Signer
from src.core.crypto.signer import (
    RECOVERY_ID_OFFSET,
    Signature,
    address_of,
    load_private_key,
    normalize_recovery_id,
    sign_digest,
)

__all__ = [
    # Typed Data
    "TypedField",
    "TypeSchema",
    "encode_type",
    "type_hash",
    "encode_field",
    "encode_data",
    "hash_struct",
    "find_dependencies",
    # SafeTx digest
    "DIGEST_PREFIX",
    "EIP712_DOMAIN_TYPE",
    "SAFE_TX_TYPE",
    "SAFE_TX_FIELDS",
    "SafeTxDigest",
    "SafeTxDigestBuilder",
    "combine_digest",
    "safe_tx_types",
    # Signer
    "RECOVERY_ID_OFFSET",
    "Signature",
    "address_of",
    "load_private_key",
    "normalize_recovery_id",
    "sign_digest",
]

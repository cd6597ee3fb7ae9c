"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Интеграция с Pydantic моделями (TransactionProposal.to_payload)
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    GasEstimationValidator,
    MultisigTransactionValidator,
    ProposalErrorValidator,
    SafeInfoValidator,
    SchemaLoader,
    validate_gas_estimation,
    validate_multisig_transaction,
    validate_proposal_error,
    validate_safe_info,
)
from src.core.domain import TransactionProposal


SCHEMA_NAMES = ["safe_info", "gas_estimation", "proposal_error", "multisig_transaction"]


@pytest.fixture
def valid_payload():
    return TransactionProposal(
        safe="0x1111111111111111111111111111111111111111",
        to="0x2222222222222222222222222222222222222222",
        value=1_000_000,
        safe_tx_gas=21000,
        nonce=5,
        contract_transaction_hash="0x" + "0f" * 32,
        sender="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23",
        signature="0x" + "aa" * 64 + "1b",
    ).to_payload()


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка и meta-validation схем."""

    @pytest.mark.parametrize("name", SCHEMA_NAMES)
    def test_schema_loads(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["$id"] == f"{name}.json"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("safe_info") is loader.load_schema("safe_info")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# RESPONSE CONTRACTS
# =============================================================================


class TestSafeInfoContract:
    def test_valid(self, safe_info_body):
        validate_safe_info(safe_info_body)

    def test_missing_nonce(self, safe_info_body):
        body = {k: v for k, v in safe_info_body.items() if k != "nonce"}
        with pytest.raises(ValidationError):
            validate_safe_info(body)

    def test_is_valid_without_exception(self):
        assert SafeInfoValidator().is_valid({"nonce": 1})
        assert not SafeInfoValidator().is_valid({"nonce": 1.5})

    def test_bad_address(self):
        assert not SafeInfoValidator().is_valid({"nonce": 1, "address": "0x12"})

    def test_nonce_uint256_bound(self):
        assert SafeInfoValidator().is_valid({"nonce": 2**256 - 1})
        assert not SafeInfoValidator().is_valid({"nonce": 2**256})


class TestGasEstimationContract:
    def test_valid(self, gas_estimation_body):
        validate_gas_estimation(gas_estimation_body)

    def test_null_auxiliary_fields(self):
        validate_gas_estimation({"safeTxGas": "1", "baseGas": None, "lastUsedNonce": None})

    def test_safe_tx_gas_must_be_string(self):
        assert not GasEstimationValidator().is_valid({"safeTxGas": 21000})


class TestProposalErrorContract:
    def test_valid(self):
        validate_proposal_error({"nonFieldErrors": ["Nonce too low"]})

    def test_field_errors_allowed(self):
        validate_proposal_error({"nonce": ["too low"], "code": 1})

    def test_non_field_errors_must_be_list_of_strings(self):
        errors = list(ProposalErrorValidator().iter_errors({"nonFieldErrors": [1, 2]}))
        assert len(errors) == 2


# =============================================================================
# REQUEST CONTRACT
# =============================================================================


class TestMultisigTransactionContract:
    def test_model_payload_valid(self, valid_payload):
        validate_multisig_transaction(valid_payload)

    @pytest.mark.parametrize("field", ["nonce", "signature", "contractTransactionHash", "origin"])
    def test_required(self, valid_payload, field):
        del valid_payload[field]
        with pytest.raises(ValidationError):
            validate_multisig_transaction(valid_payload)

    def test_no_extra_fields(self, valid_payload):
        valid_payload["safe"] = "0x1111111111111111111111111111111111111111"
        assert not MultisigTransactionValidator().is_valid(valid_payload)

    def test_delegate_call_rejected(self, valid_payload):
        valid_payload["operation"] = 1
        assert not MultisigTransactionValidator().is_valid(valid_payload)

    def test_safe_tx_gas_integer(self, valid_payload):
        valid_payload["safeTxGas"] = "21000"
        assert not MultisigTransactionValidator().is_valid(valid_payload)

    @pytest.mark.parametrize("field", ["value", "safeTxGas", "nonce"])
    def test_uint256_bound(self, valid_payload, field):
        valid_payload[field] = 2**256
        assert not MultisigTransactionValidator().is_valid(valid_payload)

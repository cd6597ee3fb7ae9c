"""
Contract Validation Module

Модуль для валидации JSON контрактов coordination service.
"""

from .validators import (
    ContractValidator,
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

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SafeInfoValidator",
    "GasEstimationValidator",
    "ProposalErrorValidator",
    "MultisigTransactionValidator",
    # Functions
    "validate_safe_info",
    "validate_gas_estimation",
    "validate_proposal_error",
    "validate_multisig_transaction",
]

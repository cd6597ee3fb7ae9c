"""Proposal — оркестрация отправки одного multisig proposal.

FETCH_NONCE → ESTIMATE_GAS → BUILD_DIGEST → SIGN → SUBMIT → DONE
"""

from .state_machine import (
    ProposalOutcome,
    ProposalRequest,
    ProposalStateMachine,
    ProposalStep,
    send_transaction,
)

__all__ = [
    "ProposalStateMachine",
    "ProposalRequest",
    "ProposalOutcome",
    "ProposalStep",
    "send_transaction",
]

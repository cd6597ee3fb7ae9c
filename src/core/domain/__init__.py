"""
Domain models and value objects.

Contains the Safe account snapshot, the candidate call, the fee estimate and
the signed transaction proposal.
"""

from src.core.domain.account import SafeAccount
from src.core.domain.addresses import ZERO_ADDRESS, normalize_address
from src.core.domain.call import CandidateCall, Operation
from src.core.domain.fee import FeeEstimate
from src.core.domain.proposal import TransactionProposal
from src.core.domain.units import UINT256_MAX

__all__ = [
    # Addresses
    "ZERO_ADDRESS",
    "normalize_address",
    # Units
    "UINT256_MAX",
    # Models
    "SafeAccount",
    "CandidateCall",
    "Operation",
    "FeeEstimate",
    "TransactionProposal",
]

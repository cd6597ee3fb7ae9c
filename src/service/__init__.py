"""Coordination service clients — состояние Safe, оценка газа, отправка proposal."""

from .account_state import AccountStateClient
from .config import ServiceConfig
from .fee_estimator import FeeEstimator, parse_decimal_int
from .submitter import ProposalSubmitter, rejection_reasons

__all__ = [
    "ServiceConfig",
    "AccountStateClient",
    "FeeEstimator",
    "parse_decimal_int",
    "ProposalSubmitter",
    "rejection_reasons",
]

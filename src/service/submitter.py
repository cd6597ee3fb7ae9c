"""
ProposalSubmitter — Отправка подписанного proposal

POST {transaction_service_url}/safes/{account}/multisig-transactions/

- 2xx     → успех, тело не читается
- иначе   → RejectedProposal с причинами из nonFieldErrors (через "\\n")
"""

import logging
from typing import Any, List, Mapping, Optional

import requests
from jsonschema import ValidationError

from src.core.contracts.validators import MultisigTransactionValidator, ProposalErrorValidator
from src.core.domain.proposal import TransactionProposal
from src.core.errors import RejectedProposal
from src.service.config import ServiceConfig
from src.service.transport import decode_json, is_success, send_json

logger = logging.getLogger(__name__)


def rejection_reasons(body: Mapping[str, Any], status_code: int) -> List[str]:
    """
    Причины отказа из тела ошибки.

    nonFieldErrors используются как есть и в исходном порядке. Если их нет,
    field-level ошибки разворачиваются в "field: message".
    """
    reasons: List[str] = list(body.get("nonFieldErrors") or [])
    if reasons:
        return reasons

    for field, messages in body.items():
        if field == "nonFieldErrors":
            continue
        if not isinstance(messages, list):
            messages = [messages]
        reasons.extend(f"{field}: {message}" for message in messages)

    return reasons or [f"HTTP {status_code}"]


class ProposalSubmitter:
    """Клиент отправки proposal."""

    def __init__(self, config: ServiceConfig, session: Optional[Any] = None):
        self.config = config
        self.session = session or requests.Session()
        self._payload_validator = MultisigTransactionValidator()
        self._error_validator = ProposalErrorValidator()

    def submit(self, proposal: TransactionProposal) -> None:
        """
        Отправка proposal на сбор подписей.

        Raises:
            RemoteUnavailable: Ошибка транспорта
            DecodeError: Тело отказа не JSON или не соответствует proposal_error
            RejectedProposal: Сервис отклонил proposal
            ValueError: Исходящее тело нарушает контракт multisig_transaction
        """
        payload = proposal.to_payload()
        try:
            self._payload_validator.validate(payload)
        except ValidationError as e:
            raise ValueError(f"Proposal payload violates contract: {e.message}") from e

        url = f"{self.config.transaction_service_url}/safes/{proposal.safe}/multisig-transactions/"
        response = send_json(
            self.session, "POST", url, payload=payload, timeout_s=self.config.timeout_s
        )

        if is_success(response):
            logger.info(
                "Proposal %s accepted (HTTP %d)",
                proposal.contract_transaction_hash,
                response.status_code,
            )
            return

        body = decode_json(response, self._error_validator)
        reasons = rejection_reasons(body, response.status_code)
        logger.warning(
            "Proposal %s rejected (HTTP %d): %s",
            proposal.contract_transaction_hash,
            response.status_code,
            "; ".join(reasons),
        )
        raise RejectedProposal(reasons, status_code=response.status_code)

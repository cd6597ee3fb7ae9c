"""Proposal State Machine — последовательная отправка одного SafeTx proposal.

Линейная цепочка без ветвлений, кроме ошибки:
    FETCH_NONCE → ESTIMATE_GAS → BUILD_DIGEST → SIGN → SUBMIT → DONE

Первая ProposalError любого шага переводит машину в терминальное FAILED с
ошибкой и шагом, на котором она произошла. Компенсаций нет: побочный эффект
на стороне сервиса имеет только SUBMIT.

Параллельные запуски для одного Safe не координируются; единственная защита
от двойной отправки — проверка nonce на стороне сервиса.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from src.core.crypto.safe_tx import SafeTxDigest, SafeTxDigestBuilder
from src.core.crypto.signer import Signature, sign_digest
from src.core.domain.addresses import ZERO_ADDRESS, normalize_address
from src.core.domain.call import CandidateCall
from src.core.domain.proposal import TransactionProposal
from src.core.errors import ProposalError
from src.service.account_state import AccountStateClient
from src.service.config import ServiceConfig
from src.service.fee_estimator import FeeEstimator
from src.service.submitter import ProposalSubmitter

logger = logging.getLogger(__name__)


class ProposalStep(str, Enum):
    """Состояние машины."""

    FETCH_NONCE = "FETCH_NONCE"
    ESTIMATE_GAS = "ESTIMATE_GAS"
    BUILD_DIGEST = "BUILD_DIGEST"
    SIGN = "SIGN"
    SUBMIT = "SUBMIT"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass(frozen=True)
class ProposalRequest:
    """Параметры вызова (не из конфигурации)."""

    sender: str
    safe: str
    to: str
    value: int
    private_key: str = field(repr=False)
    data: Optional[bytes] = None


@dataclass(frozen=True)
class ProposalOutcome:
    """Результат прогона машины."""

    state: ProposalStep
    history: Tuple[ProposalStep, ...]

    # FAILED
    failed_step: Optional[ProposalStep]
    error: Optional[ProposalError]

    # Промежуточные результаты (None для не пройденных шагов)
    nonce: Optional[int]
    safe_tx_gas: Optional[int]
    digest: Optional[SafeTxDigest]
    proposal: Optional[TransactionProposal]

    @property
    def succeeded(self) -> bool:
        return self.state == ProposalStep.DONE

    def raise_for_error(self) -> None:
        """Проброс ошибки шага без изменений."""
        if self.error is not None:
            raise self.error


class ProposalStateMachine:
    """Оркестратор FETCH_NONCE → ... → DONE.

    Клиенты и построитель digest можно передать явно (например, в тестах);
    по умолчанию они создаются из config и общей session.
    """

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        session: Optional[Any] = None,
        account_client: Optional[AccountStateClient] = None,
        fee_estimator: Optional[FeeEstimator] = None,
        submitter: Optional[ProposalSubmitter] = None,
        digest_builder: Optional[SafeTxDigestBuilder] = None,
    ):
        self.config = config or ServiceConfig()
        self.account_client = account_client or AccountStateClient(self.config, session)
        self.fee_estimator = fee_estimator or FeeEstimator(self.config, session)
        self.submitter = submitter or ProposalSubmitter(self.config, session)
        self.digest_builder = digest_builder or SafeTxDigestBuilder(chain_id=self.config.chain_id)

    def run(self, request: ProposalRequest) -> ProposalOutcome:
        """Прогон одного proposal.

        Args:
            request: Параметры вызова

        Returns:
            ProposalOutcome в состоянии DONE или FAILED

        Raises:
            ValueError: Некорректные адреса или сумма в request (до первого шага)
        """
        safe = normalize_address(request.safe)
        sender = normalize_address(request.sender)
        call = CandidateCall(to=request.to, value=request.value, data=request.data)

        history: List[ProposalStep] = [ProposalStep.FETCH_NONCE]
        nonce: Optional[int] = None
        safe_tx_gas: Optional[int] = None
        digest: Optional[SafeTxDigest] = None
        proposal: Optional[TransactionProposal] = None

        try:
            # 1. Nonce (свежий, без кэша)
            nonce = self.account_client.get_nonce(safe)

            # 2. Оценка газа
            self._advance(history, ProposalStep.ESTIMATE_GAS)
            safe_tx_gas = self.fee_estimator.estimate(call.to, safe, call.value).safe_tx_gas

            # 3. Digest
            self._advance(history, ProposalStep.BUILD_DIGEST)
            digest = self.digest_builder.build(safe, call, safe_tx_gas, nonce)
            logger.info("SafeTx hash %s (nonce=%d, safeTxGas=%d)", digest.hex(), nonce, safe_tx_gas)

            # 4. Подпись
            self._advance(history, ProposalStep.SIGN)
            signature = sign_digest(digest.digest, request.private_key)

            # 5. Отправка
            self._advance(history, ProposalStep.SUBMIT)
            proposal = self._build_proposal(safe, sender, call, safe_tx_gas, nonce, digest, signature)
            self.submitter.submit(proposal)
        except ProposalError as e:
            failed_step = history[-1]
            logger.error("Proposal failed at %s: %s", failed_step.value, e)
            history.append(ProposalStep.FAILED)
            return self._create_outcome(
                state=ProposalStep.FAILED,
                history=history,
                failed_step=failed_step,
                error=e,
                nonce=nonce,
                safe_tx_gas=safe_tx_gas,
                digest=digest,
                proposal=proposal,
            )

        self._advance(history, ProposalStep.DONE)
        return self._create_outcome(
            state=ProposalStep.DONE,
            history=history,
            failed_step=None,
            error=None,
            nonce=nonce,
            safe_tx_gas=safe_tx_gas,
            digest=digest,
            proposal=proposal,
        )

    def _build_proposal(
        self,
        safe: str,
        sender: str,
        call: CandidateCall,
        safe_tx_gas: int,
        nonce: int,
        digest: SafeTxDigest,
        signature: Signature,
    ) -> TransactionProposal:
        """Proposal из тех же значений, что попали в digest."""
        return TransactionProposal(
            safe=safe,
            to=call.to,
            value=call.value,
            data=call.data_hex(),
            operation=call.operation,
            gas_token=call.gas_token or ZERO_ADDRESS,
            safe_tx_gas=safe_tx_gas,
            base_gas=0,
            gas_price=0,
            refund_receiver=ZERO_ADDRESS,
            nonce=nonce,
            contract_transaction_hash=digest.hex(),
            sender=sender,
            signature=signature.to_hex(),
            origin=self.config.origin,
        )

    def _advance(self, history: List[ProposalStep], step: ProposalStep) -> None:
        logger.debug("%s → %s", history[-1].value, step.value)
        history.append(step)

    def _create_outcome(
        self,
        state: ProposalStep,
        history: List[ProposalStep],
        failed_step: Optional[ProposalStep],
        error: Optional[ProposalError],
        nonce: Optional[int],
        safe_tx_gas: Optional[int],
        digest: Optional[SafeTxDigest],
        proposal: Optional[TransactionProposal],
    ) -> ProposalOutcome:
        """Создание результата прогона."""
        return ProposalOutcome(
            state=state,
            history=tuple(history),
            failed_step=failed_step,
            error=error,
            nonce=nonce,
            safe_tx_gas=safe_tx_gas,
            digest=digest,
            proposal=proposal,
        )


def send_transaction(
    sender: str,
    to: str,
    safe: str,
    amount: int,
    private_key: str,
    config: Optional[ServiceConfig] = None,
    session: Optional[Any] = None,
) -> ProposalOutcome:
    """Отправка одного proposal с пробросом ошибки.

    Raises:
        ProposalError: Ошибка шага, на котором остановилась машина
    """
    machine = ProposalStateMachine(config=config, session=session)
    outcome = machine.run(
        ProposalRequest(sender=sender, safe=safe, to=to, value=amount, private_key=private_key)
    )
    outcome.raise_for_error()
    return outcome

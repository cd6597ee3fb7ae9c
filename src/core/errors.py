"""
Errors — Иерархия ошибок отправки proposal

Все ошибки, которые может вернуть цепочка FETCH_NONCE → SUBMIT, наследуются
от ProposalError. Ошибки пробрасываются вызывающему без изменений: ни повторов,
ни локального восстановления нет.
"""

from typing import List, Optional


class ProposalError(Exception):
    """Базовый класс для всех ошибок отправки proposal."""

    pass


class RemoteUnavailable(ProposalError):
    """
    Coordination service недоступен на транспортном уровне.

    Также используется для неуспешного HTTP статуса на read-only шагах
    (fetch nonce / estimate gas).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ProposalError):
    """Тело ответа не является JSON или не соответствует контракту."""

    pass


class NumericParseError(ProposalError):
    """Числовое поле, пришедшее строкой, не является base-10 integer в диапазоне uint256."""

    def __init__(self, field: str, value: object):
        super().__init__(f"{field} is not a valid base-10 uint256: {value!r}")
        self.field = field
        self.value = value


class SigningError(ProposalError):
    """Криптографический примитив отклонил ключ или digest."""

    pass


class RejectedProposal(ProposalError):
    """
    Coordination service отклонил proposal.

    str(error) — причины отказа, склеенные через перевод строки.
    """

    def __init__(self, reasons: List[str], status_code: int):
        super().__init__("\n".join(reasons))
        self.reasons = list(reasons)
        self.status_code = status_code

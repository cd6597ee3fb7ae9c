"""
FeeEstimator — Оценка safeTxGas через relay service

POST {relay_service_url}/safes/{account}/transactions/estimate/
Тело: {to, value, data: null, operation: 0, gasToken: null}

safeTxGas приходит десятичной строкой и парсится в int.
"""

import logging
import re
from typing import Any, Dict, Final, Optional

import requests
from pydantic import ValidationError as ModelValidationError

from src.core.contracts.validators import GasEstimationValidator
from src.core.domain.addresses import normalize_address
from src.core.domain.call import Operation
from src.core.domain.fee import FeeEstimate
from src.core.domain.units import UINT256_MAX
from src.core.errors import DecodeError, NumericParseError
from src.service.config import ServiceConfig
from src.service.transport import decode_json, require_success, send_json

logger = logging.getLogger(__name__)

_DECIMAL_RE: Final = re.compile(r"^[+-]?[0-9]+$")
_UINT256_DIGITS: Final[int] = len(str(UINT256_MAX))


def parse_decimal_int(value: Any, field: str = "value") -> int:
    """
    Строгий разбор base-10 integer.

    Пробелы, "_", hex и не-ASCII цифры не допускаются. Значения больше
    UINT256_MAX отклоняются: safeTxGas хэшируется как uint256.

    Examples:
        >>> parse_decimal_int("21000")
        21000

    Raises:
        NumericParseError: Если значение не является base-10 integer
            или выходит за пределы uint256
    """
    if not isinstance(value, str) or not _DECIMAL_RE.match(value):
        raise NumericParseError(field, value)
    # Длинные строки отсекаются до int(): лимит int_max_str_digits
    if len(value.lstrip("+-0")) > _UINT256_DIGITS:
        raise NumericParseError(field, value)
    parsed = int(value, 10)
    if parsed > UINT256_MAX:
        raise NumericParseError(field, value)
    return parsed


class FeeEstimator:
    """Клиент оценки газа."""

    def __init__(self, config: ServiceConfig, session: Optional[Any] = None):
        self.config = config
        self.session = session or requests.Session()
        self._validator = GasEstimationValidator()

    def estimate(self, to: str, safe_address: str, value: int) -> FeeEstimate:
        """
        Оценка газа для прямого вызова без call-data.

        Args:
            to: Адрес получателя
            safe_address: Адрес Safe
            value: Сумма в wei

        Returns:
            FeeEstimate (safe_tx_gas распарсен)

        Raises:
            RemoteUnavailable: Ошибка транспорта или статус не 2xx
            DecodeError: Тело не JSON или не соответствует gas_estimation
            NumericParseError: safeTxGas не является base-10 integer
        """
        url = f"{self.config.relay_service_url}/safes/{safe_address}/transactions/estimate/"
        payload: Dict[str, Any] = {
            "to": normalize_address(to),
            "value": value,
            "data": None,
            "operation": int(Operation.CALL),
            "gasToken": None,
        }
        response = send_json(
            self.session, "POST", url, payload=payload, timeout_s=self.config.timeout_s
        )
        require_success(response, "estimate gas")

        body = decode_json(response, self._validator)
        safe_tx_gas = parse_decimal_int(body["safeTxGas"], "safeTxGas")

        try:
            estimate = FeeEstimate(
                safe_tx_gas=safe_tx_gas,
                base_gas=body.get("baseGas"),
                data_gas=body.get("dataGas"),
                operational_gas=body.get("operationalGas"),
                gas_price=body.get("gasPrice"),
                last_used_nonce=body.get("lastUsedNonce"),
                gas_token=body.get("gasToken"),
                refund_receiver=body.get("refundReceiver"),
            )
        except ModelValidationError as e:
            raise DecodeError(f"Invalid gas estimation: {e}") from e

        logger.info("safeTxGas=%d for %s → %s", estimate.safe_tx_gas, safe_address, to)
        return estimate

"""
AccountStateClient — Состояние Safe из transaction service

GET {transaction_service_url}/safes/{account}

Один запрос авторитетен до конца цепочки; повторов и кэша нет.
"""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError as ModelValidationError

from src.core.contracts.validators import SafeInfoValidator
from src.core.domain.account import SafeAccount
from src.core.errors import DecodeError
from src.service.config import ServiceConfig
from src.service.transport import decode_json, require_success, send_json

logger = logging.getLogger(__name__)


class AccountStateClient:
    """Клиент чтения состояния Safe."""

    def __init__(self, config: ServiceConfig, session: Optional[Any] = None):
        """
        Args:
            config: Конфигурация сервиса
            session: HTTP session (по умолчанию requests.Session())
        """
        self.config = config
        self.session = session or requests.Session()
        self._validator = SafeInfoValidator()

    def fetch(self, safe_address: str) -> SafeAccount:
        """
        Снапшот Safe.

        Raises:
            RemoteUnavailable: Ошибка транспорта или статус не 2xx
            DecodeError: Тело не JSON или не соответствует safe_info
        """
        url = f"{self.config.transaction_service_url}/safes/{safe_address}"
        response = send_json(self.session, "GET", url, timeout_s=self.config.timeout_s)
        require_success(response, "fetch safe")

        body = decode_json(response, self._validator)
        try:
            account = SafeAccount.model_validate({"address": safe_address, **body})
        except ModelValidationError as e:
            raise DecodeError(f"Invalid safe info: {e}") from e

        logger.info("Safe %s nonce=%d", account.address, account.nonce)
        return account

    def get_nonce(self, safe_address: str) -> int:
        """Текущий nonce Safe."""
        return self.fetch(safe_address).nonce

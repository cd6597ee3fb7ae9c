"""
Transport — Общий JSON-over-HTTP helper для клиентов

Переводит ошибки транспорта и декодирования в ошибки ядра:
- requests.RequestException → RemoteUnavailable
- невалидный JSON           → DecodeError
- нарушение контракта       → DecodeError

Повторов нет: один запрос — один ответ.
"""

import logging
from typing import Any, Optional

import requests
from jsonschema import ValidationError

from src.core.contracts.validators import ContractValidator
from src.core.errors import DecodeError, RemoteUnavailable

logger = logging.getLogger(__name__)


def send_json(
    session: Any,
    method: str,
    url: str,
    payload: Optional[Any] = None,
    timeout_s: Optional[float] = None,
) -> requests.Response:
    """
    Выполнение запроса.

    Args:
        session: requests.Session (или объект с тем же методом request)
        method: HTTP метод
        url: Полный URL
        payload: JSON тело (None — без тела)
        timeout_s: Таймаут (None — без таймаута)

    Returns:
        Ответ сервиса (любой статус)

    Raises:
        RemoteUnavailable: Ошибка транспорта
    """
    logger.debug("%s %s", method, url)
    try:
        return session.request(method, url, json=payload, timeout=timeout_s)
    except requests.RequestException as e:
        raise RemoteUnavailable(f"{method} {url} failed: {e}") from e


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def require_success(response: requests.Response, what: str) -> None:
    """
    Raises:
        RemoteUnavailable: Если статус не 2xx
    """
    if not is_success(response):
        raise RemoteUnavailable(
            f"{what}: unexpected HTTP status {response.status_code}",
            status_code=response.status_code,
        )


def decode_json(response: requests.Response, validator: ContractValidator) -> Any:
    """
    Декодирование тела и проверка контракта.

    Raises:
        DecodeError: Тело не JSON или не соответствует схеме
    """
    try:
        body = response.json()
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e

    try:
        validator.validate(body)
    except ValidationError as e:
        raise DecodeError(
            f"Response does not match {validator.schema_name} contract: {e.message}"
        ) from e
    return body

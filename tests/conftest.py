"""
Общие fixtures: fake HTTP session без сети.

FakeSession повторяет единственный метод requests.Session, который использует
ядро: request(method, url, json=None, timeout=None).
"""

import json
from typing import Any, Dict, List, Tuple, Union

import pytest
import requests


TX_SERVICE_URL = "https://tx.example/api/v1"
RELAY_SERVICE_URL = "https://relay.example/api/v2"

# Известный тестовый ключ и его адрес
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_SENDER = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

SAFE = "0x1111111111111111111111111111111111111111"
DESTINATION = "0x2222222222222222222222222222222222222222"


def make_response(status_code: int, body: Union[Dict[str, Any], List[Any], str, None] = None) -> requests.Response:
    """requests.Response с заданным статусом и телом (dict/list → JSON, str → как есть)."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Маршрутизация (method, url) → Response или Exception."""

    def __init__(self, routes: Dict[Tuple[str, str], Union[requests.Response, Exception]]):
        self.routes = dict(routes)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, json: Any = None, timeout: Any = None) -> requests.Response:
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        result = self.routes[(method, url)]
        if isinstance(result, Exception):
            raise result
        return result

    def calls_to(self, method: str, url: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["method"] == method and c["url"] == url]


def safe_url(safe: str = SAFE) -> str:
    return f"{TX_SERVICE_URL}/safes/{safe}"


def estimate_url(safe: str = SAFE) -> str:
    return f"{RELAY_SERVICE_URL}/safes/{safe}/transactions/estimate/"


def submit_url(safe: str = SAFE) -> str:
    return f"{TX_SERVICE_URL}/safes/{safe}/multisig-transactions/"


@pytest.fixture
def service_config():
    from src.service.config import ServiceConfig

    return ServiceConfig(transaction_service_url=TX_SERVICE_URL, relay_service_url=RELAY_SERVICE_URL)


@pytest.fixture
def safe_info_body():
    """Валидный ответ GET /safes/{account}."""
    return {
        "address": SAFE,
        "nonce": 5,
        "threshold": 2,
        "owners": [TEST_SENDER, "0x3333333333333333333333333333333333333333"],
        "masterCopy": "0x34CfAC646f301356fAa8B21e94227e3583Fe3F5F",
        "modules": [],
        "fallbackHandler": "0xd5D82B6aDDc9027B22dCA772Aa68D5d74cdBdF44",
        "guard": "0x0000000000000000000000000000000000000000",
        "version": "1.1.1",
    }


@pytest.fixture
def gas_estimation_body():
    """Валидный ответ relay service на estimate."""
    return {
        "safeTxGas": "21000",
        "baseGas": "48834",
        "dataGas": "48834",
        "operationalGas": "0",
        "gasPrice": "1000000000",
        "lastUsedNonce": 4,
        "gasToken": "0x0000000000000000000000000000000000000000",
        "refundReceiver": "0x0000000000000000000000000000000000000000",
    }

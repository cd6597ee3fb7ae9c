"""
JSON Schema Contract Validators

Модуль для валидации JSON тел coordination service согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema для проверки
соответствия данных схемам.

Схемы (contracts/schema/):
- safe_info.json            — ответ GET /safes/{account}
- gas_estimation.json       — ответ POST .../transactions/estimate/
- proposal_error.json       — тело отказа POST .../multisig-transactions/
- multisig_transaction.json — тело запроса POST .../multisig-transactions/
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data в каталоге schema/ рядом с модулем.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'safe_info')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        """
        Args:
            schema_name: Имя схемы для валидации
        """
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class SafeInfoValidator(ContractValidator):
    """Валидатор ответа GET /safes/{account}."""

    def __init__(self):
        super().__init__("safe_info")


class GasEstimationValidator(ContractValidator):
    """Валидатор ответа relay service на estimate."""

    def __init__(self):
        super().__init__("gas_estimation")


class ProposalErrorValidator(ContractValidator):
    """Валидатор тела отказа при отправке proposal."""

    def __init__(self):
        super().__init__("proposal_error")


class MultisigTransactionValidator(ContractValidator):
    """Валидатор исходящего тела proposal."""

    def __init__(self):
        super().__init__("multisig_transaction")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_safe_info(data: Dict[str, Any]) -> None:
    """
    Валидация ответа GET /safes/{account}.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SafeInfoValidator().validate(data)


def validate_gas_estimation(data: Dict[str, Any]) -> None:
    """
    Валидация ответа estimate.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    GasEstimationValidator().validate(data)


def validate_proposal_error(data: Dict[str, Any]) -> None:
    """
    Валидация тела отказа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ProposalErrorValidator().validate(data)


def validate_multisig_transaction(data: Dict[str, Any]) -> None:
    """
    Валидация тела proposal перед отправкой.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    MultisigTransactionValidator().validate(data)

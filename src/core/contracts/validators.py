"""
JSON Schema Contract Validators

Валидация входного и выходного документов multi-send калькулятора
против JSON Schema контрактов.

Схемы поставляются как package data (src/core/contracts/schema/)
и читаются через importlib.resources, поэтому доступны и после
обычной (не editable) установки:
- multi_send_request.json (балансы, определения, транзакция)
- balance_changes.json (результат расчёта)
"""

import json
from importlib import resources
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

SCHEMA_PACKAGE = "src.core.contracts"
SCHEMA_DIRECTORY = "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema из ресурсов пакета.

    Схемы кэшируются: повторная загрузка возвращает тот же dict.
    """

    def __init__(self, package: str = SCHEMA_PACKAGE, directory: str = SCHEMA_DIRECTORY):
        """
        Args:
            package: пакет, содержащий каталог схем
            directory: каталог схем внутри пакета

        Raises:
            RuntimeError: Если каталог схем отсутствует в пакете
        """
        self._schema_dir = resources.files(package).joinpath(directory)
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {package}/{directory}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка схемы по имени.

        Args:
            schema_name: Имя схемы без расширения (например, 'multi_send_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        resource = self._schema_dir.joinpath(f"{schema_name}.json")
        if not resource.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_name}.json")

        schema = json.loads(resource.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор документа против одной схемы."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все нарушения контракта, упорядоченные по пути в документе."""
        errors = self.validator.iter_errors(data)
        return iter(sorted(errors, key=lambda e: [str(part) for part in e.absolute_path]))

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Человекочитаемые нарушения контракта.

        Returns:
            Список строк '<json path>: <message>' (пустой если документ валиден)
        """
        return [f"{error.json_path}: {error.message}" for error in self.iter_errors(data)]


class MultiSendRequestValidator(ContractValidator):
    """Валидатор для multi_send_request контракта."""

    def __init__(self):
        super().__init__("multi_send_request")


class BalanceChangesValidator(ContractValidator):
    """Валидатор для balance_changes контракта (результат расчёта)."""

    def __init__(self):
        super().__init__("balance_changes")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_multi_send_request(data: Dict[str, Any]) -> None:
    """
    Валидация входного документа multi-send.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    MultiSendRequestValidator().validate(data)


def validate_balance_changes(data: Dict[str, Any]) -> None:
    """
    Валидация документа результата.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BalanceChangesValidator().validate(data)

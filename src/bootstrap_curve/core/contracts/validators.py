"""
JSON Schema Contract Validators

Схемы:
- curve_snapshot.json (экспорт состояния движка)
- engine_settings.json (файл настроек движка)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем схем и валидаторов.

    Схемы лежат в пакете: bootstrap_curve/core/contracts/schema/.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema

    def validator(self, schema_name: str) -> Draft202012Validator:
        if schema_name not in self._validators:
            self._validators[schema_name] = Draft202012Validator(self.load_schema(schema_name))
        return self._validators[schema_name]


_SCHEMA_LOADER = SchemaLoader()


def validate_curve_snapshot(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют curve_snapshot
    """
    _SCHEMA_LOADER.validator("curve_snapshot").validate(data)


def validate_engine_settings(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют engine_settings
    """
    _SCHEMA_LOADER.validator("engine_settings").validate(data)

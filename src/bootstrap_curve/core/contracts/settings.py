"""
Settings — загрузка настроек движка из JSON

Файл проходит JSON Schema (engine_settings.json), затем строится
immutable EngineSettings. Ошибки обеих ступеней сводятся к ConfigurationError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from bootstrap_curve.core.contracts.validators import validate_engine_settings
from bootstrap_curve.core.domain.configs import EngineSettings
from bootstrap_curve.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def parse_engine_settings(data: Dict[str, Any]) -> EngineSettings:
    """
    dict → EngineSettings.

    Raises:
        ConfigurationError: Если данные не проходят схему или модель
    """
    try:
        validate_engine_settings(data)
    except SchemaValidationError as e:
        raise ConfigurationError(f"engine settings violate schema: {e.message}") from e

    try:
        return EngineSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid engine settings: {e}") from e


def load_engine_settings(path: str | Path) -> EngineSettings:
    """
    Загрузка EngineSettings из JSON-файла.

    Raises:
        FileNotFoundError: Если файла нет
        ConfigurationError: Если JSON невалиден или не проходит схему
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: invalid JSON: {e}") from e

    settings = parse_engine_settings(data)
    logger.info("loaded engine settings from %s (owner=%s)", path, settings.owner)
    return settings

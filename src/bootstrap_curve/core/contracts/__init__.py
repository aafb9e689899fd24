"""
Contract Validation Module

Валидация JSON контрактов: экспорт снапшота и файл настроек движка.
"""

from .settings import load_engine_settings, parse_engine_settings
from .validators import SchemaLoader, validate_curve_snapshot, validate_engine_settings

__all__ = [
    "SchemaLoader",
    "validate_curve_snapshot",
    "validate_engine_settings",
    "parse_engine_settings",
    "load_engine_settings",
]

"""
Configuration module for the outcome normalization layer
Centralizes grid geometry, adapter defaults, sticky-wild settings, replay and
logging options with environment and YAML overrides plus validation
"""

import copy
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


class ConfigError(Exception):
    """Configuration validation error"""
    pass


def _safe_int_env(name: str, default: int, min_val: int = None, max_val: int = None) -> int:
    """
    Safely parse integer environment variable with bounds.
    Falls back to default on invalid values.
    """
    logger_local = logging.getLogger(__name__)
    try:
        value = int(os.getenv(name, str(default)))
        if min_val is not None:
            value = max(min_val, value)
        if max_val is not None:
            value = min(max_val, value)
        return value
    except (ValueError, TypeError):
        logger_local.warning(f"Invalid {name}, using default {default}")
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Configuration for adapters, persistent stores and fixture replay.

    Class-level dicts hold the defaults; every instance works on its own copy
    so overrides never leak between instances.
    """

    # ========== Grid Geometry ==========
    # Shared with the rendering side; both ends assume these exact dimensions.
    GRID = {
        'columns': 5,
        'rows': 4,
    }

    # ========== Adapter Defaults ==========
    ADAPTER = {
        'schema_version': '1.0.0',
        'default_currency': 'USD',
        'reference_game_id': 'wildvodu',
        'reference_adapter_id': 'reference:wildvodu',
        'reference_priority': 50,
    }

    # ========== Sticky Wilds ==========
    STICKY = {
        'store_key': 'sticky_wilds',
        'wild_symbol_id': 90,
    }

    # ========== Fixture Replay ==========
    REPLAY = {
        'fixture_path': str(Path(__file__).resolve().parent.parent / 'fixtures' / 'reference_p0.json'),
        'policy': 'exhaust',
    }

    # ========== Logging Settings ==========
    LOGGING = {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'log_file': None,
        'max_bytes': 5 * 1024 * 1024,
        'backup_count': 3,
        'json_logs': False,
        'colored_output': True,
    }

    SECTIONS = ('GRID', 'ADAPTER', 'STICKY', 'REPLAY', 'LOGGING')

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        validate: bool = True,
        use_env: bool = True,
    ):
        """
        Initialize configuration

        Args:
            config_file: Optional YAML file with per-section overrides
                (falls back to OUTCOME_CONFIG_FILE when use_env is set)
            validate: Whether to validate configuration on init
            use_env: Whether to apply OUTCOME_* environment overrides
        """
        self._lock = threading.RLock()
        for section in self.SECTIONS:
            setattr(self, section, copy.deepcopy(getattr(type(self), section)))

        if config_file is None and use_env:
            config_file = os.getenv('OUTCOME_CONFIG_FILE') or None
        self.config_file = config_file

        if config_file:
            self.load_from_file(config_file)

        if use_env:
            self._apply_env_overrides()

        if validate:
            self.validate()

    def _apply_env_overrides(self):
        with self._lock:
            self.GRID['columns'] = _safe_int_env('OUTCOME_GRID_COLUMNS', self.GRID['columns'], 1, 64)
            self.GRID['rows'] = _safe_int_env('OUTCOME_GRID_ROWS', self.GRID['rows'], 1, 64)
            self.STICKY['wild_symbol_id'] = _safe_int_env(
                'OUTCOME_STICKY_WILD_SYMBOL', self.STICKY['wild_symbol_id']
            )
            self.ADAPTER['default_currency'] = os.getenv(
                'OUTCOME_CURRENCY', self.ADAPTER['default_currency']
            )
            self.REPLAY['fixture_path'] = os.getenv('OUTCOME_FIXTURE_PATH', self.REPLAY['fixture_path'])
            self.REPLAY['policy'] = os.getenv('OUTCOME_REPLAY_POLICY', self.REPLAY['policy']).lower()
            self.LOGGING['level'] = os.getenv('LOG_LEVEL', self.LOGGING['level'])
            self.LOGGING['log_file'] = os.getenv('OUTCOME_LOG_FILE', self.LOGGING['log_file'])
            self.LOGGING['json_logs'] = _bool_env('OUTCOME_JSON_LOGS', self.LOGGING['json_logs'])

    def load_from_file(self, filepath: Union[str, Path]):
        """
        Merge section overrides from a YAML file

        Expected shape: top-level keys named after sections (lowercase), e.g.
            grid: {columns: 5, rows: 4}
            sticky: {wild_symbol_id: 90}
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise ConfigError(f"Config file not found: {filepath}")

        try:
            with open(filepath, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping, got {type(data).__name__}")

        with self._lock:
            for key, values in data.items():
                section = str(key).upper()
                if section not in self.SECTIONS:
                    raise ConfigError(f"Unknown config section: {key}")
                if not isinstance(values, dict):
                    raise ConfigError(f"Config section {key} must be a mapping")
                getattr(self, section).update(values)

    def validate(self):
        """
        Validate all configuration values

        Raises:
            ConfigError: If configuration is invalid
        """
        errors = []

        if not isinstance(self.GRID['columns'], int) or self.GRID['columns'] < 1:
            errors.append("grid columns must be a positive integer")
        if not isinstance(self.GRID['rows'], int) or self.GRID['rows'] < 1:
            errors.append("grid rows must be a positive integer")

        if not self.ADAPTER['schema_version']:
            errors.append("schema_version must not be empty")
        if not self.ADAPTER['default_currency']:
            errors.append("default_currency must not be empty")
        if not isinstance(self.ADAPTER['reference_priority'], int):
            errors.append("reference_priority must be an integer")

        if not self.STICKY['store_key']:
            errors.append("sticky store_key must not be empty")
        if not isinstance(self.STICKY['wild_symbol_id'], int):
            errors.append("wild_symbol_id must be an integer")

        if self.REPLAY['policy'] not in ('exhaust', 'cycle'):
            errors.append(f"Invalid replay policy: {self.REPLAY['policy']}")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if str(self.LOGGING['level']).upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.LOGGING['level']}")

        if errors:
            raise ConfigError("Configuration validation failed:\n" + "\n".join(errors))

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {section.lower(): copy.deepcopy(getattr(self, section)) for section in self.SECTIONS}


# Constants only; registries and stores are constructed explicitly by callers
config = Config(validate=False)

"""Services package.

Keep this module lightweight: importing `services` pulls in only the logger.
The round service imports the whole adapter stack, so it is exported lazily.
"""

from __future__ import annotations

import importlib

from .logger import PerformanceLogger, cleanup_logging, get_logger, setup_logging

__all__ = ["PerformanceLogger", "cleanup_logging", "get_logger", "setup_logging"]


_LAZY_EXPORTS = {
    "RoundService": ("services.round_service", "RoundService"),
    "RecoveredRound": ("services.round_service", "RecoveredRound"),
}


def __getattr__(name: str):
    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        if name not in __all__:
            __all__.append(name)
        return value
    raise AttributeError(f"module 'services' has no attribute {name!r}")

"""Core package: error taxonomy, fixture replay, bootstrap wiring.

Only the error types load eagerly; the replay runner and bootstrap pull in
the adapters package, which itself depends on core.errors.
"""

from __future__ import annotations

import importlib

from .errors import (
    AdapterNotFoundError,
    OutcomeContractError,
    ReplayError,
    ReplayExhaustedError,
    ReplayNotLoadedError,
)

__all__ = [
    "AdapterNotFoundError",
    "OutcomeContractError",
    "ReplayError",
    "ReplayExhaustedError",
    "ReplayNotLoadedError",
]


_LAZY_EXPORTS = {
    "Fixture": ("core.replay_runner", "Fixture"),
    "ReplayRunner": ("core.replay_runner", "ReplayRunner"),
    "load_fixture_pack": ("core.replay_runner", "load_fixture_pack"),
    "build_adapter_registry": ("core.bootstrap", "build_adapter_registry"),
    "build_store_manager": ("core.bootstrap", "build_store_manager"),
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
    raise AttributeError(f"module 'core' has no attribute {name!r}")

"""
Shared test fixtures for pytest
"""

import copy
import itertools

import pytest

from adapters import AdapterRegistry, ReferenceOutcomeAdapter
from models import AdapterContext
from persistence import PersistentStoreManager, StickyWildStore
from services import cleanup_logging, setup_logging

REFERENCE_PAYLOAD = {
    "success": True,
    "balance": 1000,
    "results": {
        "req-1": {
            "data": {
                "gameType": "wildvodu",
                "betAmount": 10,
                "currentSpinWon": 50,
                "totalWon": 50,
                "current": {"next": 1},
                "spinResult": {
                    "grid": [
                        [1, 2, 3, 4],
                        [1, 2, 3, 4],
                        [1, 2, 3, 4],
                        [1, 2, 3, 4],
                        [1, 2, 3, 4],
                    ],
                    "lines": [{"s": 1, "l": [1, 1, 1], "mc": 3, "w": 50, "p": [0, 0, 0, 1, 2]}],
                    "scatterCount": 0,
                    "scatterPositions": [],
                    "triggerFreeGame": False,
                    "stickyWilds": {},
                },
            }
        }
    },
}


def make_record(
    total_won=0,
    bet=10,
    grid=None,
    lines=None,
    scatter_count=0,
    scatter_positions=None,
    trigger=False,
    sticky=None,
    next_step=0,
):
    """Build one raw round-data record"""
    return {
        "gameType": "wildvodu",
        "betAmount": bet,
        "currentSpinWon": total_won,
        "totalWon": total_won,
        "current": {"next": next_step},
        "spinResult": {
            "grid": grid if grid is not None else [[c * 4 + r for r in range(4)] for c in range(5)],
            "lines": lines or [],
            "scatterCount": scatter_count,
            "scatterPositions": scatter_positions or [],
            "triggerFreeGame": trigger,
            "stickyWilds": sticky or {},
        },
    }


def make_payload(data, key="req-1", success=True):
    """Wrap round data in a response envelope"""
    return {"success": success, "balance": 1000, "results": {key: {"data": data}}}


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Setup logging for all tests"""
    setup_logging({"level": "DEBUG", "colored_output": False, "log_file": None})
    yield
    cleanup_logging()


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def reference_payload():
    """Single-step reference payload (fresh copy per test)"""
    return copy.deepcopy(REFERENCE_PAYLOAD)


@pytest.fixture
def cascade_payload():
    """Three-step cascade; free game triggered on the middle step only"""
    return make_payload(
        [
            make_record(total_won=10, next_step=2, sticky={"0,0": 1}),
            make_record(total_won=30, trigger=True, sticky={"0,0": 1, "1,2": 1}),
            make_record(
                total_won=45,
                scatter_count=2,
                scatter_positions=[[2, 0], [4, 3]],
                sticky={"0,0": 1, "1,2": 1, "4,3": 0},
            ),
        ]
    )


@pytest.fixture
def context():
    return AdapterContext(game_id="wildvodu", currency="USD")


@pytest.fixture
def id_factory():
    """Deterministic round/spin ids: ref-1, spin-2, ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


@pytest.fixture
def adapter(id_factory):
    return ReferenceOutcomeAdapter(id_factory=id_factory)


@pytest.fixture
def registry(adapter):
    """Fresh registry per test with the reference adapter"""
    reg = AdapterRegistry()
    reg.register(adapter)
    return reg


@pytest.fixture
def sticky_store():
    return StickyWildStore()


@pytest.fixture
def store_manager(sticky_store):
    """Fresh manager per test with the sticky wild store"""
    manager = PersistentStoreManager()
    manager.register("sticky_wilds", sticky_store)
    return manager

"""
Error taxonomy for the outcome layer

Validation failures are raised immediately and never retried here; a malformed
payload is a contract violation with the transport boundary, not a transient
condition.
"""

from models.enums import ContractErrorCode


class OutcomeContractError(Exception):
    """Raised when a raw payload or round context breaks the data contract"""

    def __init__(self, code: ContractErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


def invalid_raw_schema(message: str) -> OutcomeContractError:
    return OutcomeContractError(ContractErrorCode.INVALID_RAW_SCHEMA, message)


class AdapterNotFoundError(OutcomeContractError):
    """No registered adapter supports the round context; fatal for that round"""

    def __init__(self, game_id: str):
        super().__init__(
            ContractErrorCode.ADAPTER_NOT_FOUND,
            f"No outcome adapter found for game '{game_id}'",
        )
        self.game_id = game_id


class ReplayError(Exception):
    """Base class for fixture replay failures"""

    pass


class ReplayNotLoadedError(ReplayError):
    """Pulled from a replay runner before any fixture pack was loaded"""

    pass


class ReplayExhaustedError(ReplayError):
    """Pulled past the end of a fixture pack under the exhaust policy"""

    pass

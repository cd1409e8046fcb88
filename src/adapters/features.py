"""
Feature extraction across the full step sequence of a round
"""

from collections.abc import Sequence

from models import FeaturePayload, FeatureType, RoundRecord


def extract_features(records: Sequence[RoundRecord]) -> list[FeaturePayload]:
    """
    Derive the feature payloads of a round.

    Always returns exactly three payloads in this order:
        1. scatter_info       - count and positions from the last record
        2. free_spins_trigger - true if ANY record set triggerFreeGame
        3. sticky_wilds       - raw sticky map of the last record, unmodified

    Args:
        records: Non-empty ordered round-data records

    Raises:
        ValueError: If records is empty (the adapter rejects that earlier)
    """
    if not records:
        raise ValueError("extract_features requires at least one record")

    last = records[-1].spinResult
    triggered = any(record.spinResult.triggerFreeGame for record in records)

    return [
        FeaturePayload(
            type=FeatureType.SCATTER_INFO,
            payload={"count": last.scatterCount, "positions": last.scatterPositions},
        ),
        FeaturePayload(
            type=FeatureType.FREE_SPINS_TRIGGER,
            payload={"triggered": triggered},
        ),
        FeaturePayload(
            type=FeatureType.STICKY_WILDS,
            payload=last.stickyWilds,
        ),
    ]

"""
Round context handed to adapters for selection and normalization
"""

from pydantic import BaseModel, ConfigDict, Field


class AdapterContext(BaseModel):
    """Identifies which backend game variant produced a round."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    game_id: str = Field(..., alias="gameId", description="Backend game identifier")
    currency: str = Field("USD", description="Currency the bet is denominated in")

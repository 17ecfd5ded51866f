"""
Card view statistics for the card owner dashboard.
"""

from fastapi import APIRouter, Depends

from src.api.deps import get_facade
from src.api.errors import http_error
from src.api.schemas import StatsResponse
from src.components.distribution import DistributionFacade
from src.core.errors import EngineError

router = APIRouter()


@router.get("/{card_id}/stats", response_model=StatsResponse)
def get_card_stats(
    card_id: str,
    facade: DistributionFacade = Depends(get_facade),
) -> StatsResponse:
    try:
        stats = facade.get_stats(card_id)
    except EngineError as e:
        raise http_error(e) from e
    return StatsResponse.model_validate(stats.as_dict())

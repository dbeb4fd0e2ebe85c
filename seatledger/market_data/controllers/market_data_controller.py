from fastapi import APIRouter, Depends
from seatledger.seat_predictions.controllers.seat_predictions_controller import get_market_data_service
from seatledger.market_data.services.market_data_service import MarketDataService

router = APIRouter()


@router.get("/status")
def get_external_api_status(market_data: MarketDataService = Depends(get_market_data_service)):
    """Which marketplaces are configured, for feature-gating the UI."""
    return market_data.configuration_status()

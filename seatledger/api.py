from fastapi import APIRouter
from seatledger.team_performance.controllers.team_performance_controller import router as team_performance_router
from seatledger.seat_predictions.controllers.seat_predictions_controller import router as seat_predictions_router
from seatledger.reports.controllers.reports_controller import router as reports_router
from seatledger.reports.controllers.dashboard_controller import router as dashboard_router
from seatledger.market_data.controllers.market_data_controller import router as market_data_router

api_router = APIRouter()

api_router.include_router(team_performance_router, prefix="/team-performance", tags=["team-performance"])
api_router.include_router(seat_predictions_router, prefix="/seat-predictions", tags=["seat-predictions"])
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(market_data_router, prefix="/external-api", tags=["external-api"])

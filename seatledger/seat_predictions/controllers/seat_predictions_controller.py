from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
from seatledger.core.database import get_db
from seatledger.market_data.services.market_data_service import MarketDataService
from seatledger.seat_predictions.services.seat_prediction_service import SeatPredictionService

router = APIRouter()


class CalculatePredictionsRequest(BaseModel):
    season_id: str


def _serialize(prediction):
    return {
        "prediction_id": prediction.prediction_id,
        "seat_id": prediction.seat_id,
        "season_id": prediction.season_id,
        "predicted_value": prediction.predicted_value,
        "confidence_score": prediction.confidence_score,
        "baseline_value": prediction.baseline_value,
        "performance_multiplier": prediction.performance_multiplier,
        "demand_multiplier": prediction.demand_multiplier,
        "similar_seats_multiplier": prediction.similar_seats_multiplier,
        "factors_considered": prediction.factors_considered or [],
        "calculated_at": prediction.calculated_at,
        "valid_until": prediction.valid_until,
    }


def get_market_data_service():
    service = MarketDataService()
    try:
        yield service
    finally:
        service.close()


@router.get("/")
def get_seat_predictions(seat_id: str | None = None, season_id: str | None = None, db: Session = Depends(get_db)):
    try:
        service = SeatPredictionService(db)
        return [_serialize(p) for p in service.get_seat_value_predictions(seat_id, season_id)]
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/calculate")
def calculate_seat_predictions(request: CalculatePredictionsRequest, db: Session = Depends(get_db)):
    try:
        service = SeatPredictionService(db)
        return [_serialize(p) for p in service.calculate_seat_value_predictions(request.season_id)]
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{seat_id}/{season_id}")
def get_predicted_seat_value(seat_id: str, season_id: str, db: Session = Depends(get_db)):
    """Cached prediction for one seat, recomputed for the season when missing or expired."""
    try:
        prediction = SeatPredictionService(db).get_predicted_seat_value(seat_id, season_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

    if not prediction:
        raise HTTPException(status_code=404, detail="Prediction not found")
    return _serialize(prediction)


@router.get("/{seat_id}/{season_id}/similar-prices")
def get_similar_ticket_prices(
    seat_id: str,
    season_id: str,
    db: Session = Depends(get_db),
    market_data: MarketDataService = Depends(get_market_data_service),
):
    try:
        service = SeatPredictionService(db, market_data=market_data)
        return service.get_similar_ticket_prices(seat_id, season_id)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

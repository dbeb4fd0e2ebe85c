from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
from seatledger.core.database import get_db
from seatledger.team_performance.services.team_performance_service import TeamPerformanceService

router = APIRouter()


class CalculatePerformanceRequest(BaseModel):
    team_id: str
    season_id: str


def _serialize(performance):
    return {
        "team_performance_id": performance.team_performance_id,
        "team_id": performance.team_id,
        "season_id": performance.season_id,
        "wins": performance.wins,
        "losses": performance.losses,
        "win_percentage": performance.win_percentage,
        "average_attendance": performance.average_attendance,
        "market_demand": performance.market_demand,
        "playoff_probability": performance.playoff_probability,
        "last_updated": performance.last_updated,
    }


@router.get("/")
def get_team_performance(team_id: str | None = None, season_id: str | None = None, db: Session = Depends(get_db)):
    try:
        service = TeamPerformanceService(db)
        return [_serialize(p) for p in service.get_team_performance(team_id, season_id)]
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/calculate")
def calculate_team_performance(request: CalculatePerformanceRequest, db: Session = Depends(get_db)):
    """Recompute and store win/loss/demand figures for a team season."""
    try:
        service = TeamPerformanceService(db)
        return _serialize(service.calculate_team_performance(request.team_id, request.season_id))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from seatledger.core.database import get_db
from seatledger.reports.services.report_service import ReportService
from seatledger.balances.services.owner_balance_service import OwnerBalanceService

router = APIRouter()


@router.get("/stats/{season_id}")
def get_dashboard_stats(season_id: str, db: Session = Depends(get_db)):
    try:
        return ReportService(db).get_dashboard_stats(season_id)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/financial-summary/{season_id}")
def get_financial_summary(season_id: str, db: Session = Depends(get_db)):
    try:
        return OwnerBalanceService(db).get_financial_summary(season_id)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/ticket-holder-profits/{season_id}")
def get_ticket_holder_profits(season_id: str, db: Session = Depends(get_db)):
    try:
        return OwnerBalanceService(db).get_ticket_holder_profits(season_id)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

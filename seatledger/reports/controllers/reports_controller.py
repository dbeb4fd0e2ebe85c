from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from seatledger.core.database import get_db
from seatledger.reports.services.report_service import ReportService
from seatledger.balances.services.owner_balance_service import OwnerBalanceService

router = APIRouter()


def _run(db: Session, fn):
    try:
        return fn()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/season-summary")
def get_season_summary(team_id: str | None = None, db: Session = Depends(get_db)):
    return _run(db, lambda: ReportService(db).get_season_summary_report(team_id))


@router.get("/seat-license-investments")
def get_seat_license_investments(team_id: str | None = None, db: Session = Depends(get_db)):
    return _run(db, lambda: ReportService(db).get_seat_license_investments(team_id))


@router.get("/grand-totals")
def get_grand_totals(team_id: str | None = None, db: Session = Depends(get_db)):
    """Totals across seasons; costs include one-time license costs."""
    return _run(db, lambda: ReportService(db).get_grand_totals(team_id))


@router.get("/payment-totals")
def get_payment_totals(team_id: str | None = None, db: Session = Depends(get_db)):
    return _run(db, lambda: ReportService(db).get_payment_totals(team_id))


@router.get("/owner-totals")
def get_owner_totals(team_id: str | None = None, db: Session = Depends(get_db)):
    return _run(db, lambda: ReportService(db).get_owner_totals(team_id))


@router.get("/owner-balances")
def get_owner_balances(season_id: str | None = None, db: Session = Depends(get_db)):
    return _run(db, lambda: OwnerBalanceService(db).get_owner_balances(season_id))

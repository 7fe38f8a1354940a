"""Dashboard aggregate endpoints"""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from regdesk.models.database import get_db
from regdesk.services.exceptions import StoreError
from regdesk.services.registration_service import RegistrationService
from regdesk.services.stats_service import build_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats")
async def dashboard_stats(db: Session = Depends(get_db)):
    """KPI counts, status breakdown and monthly registrations for the charts"""
    try:
        registrations = RegistrationService(db).list_registrations()
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": build_dashboard_stats(registrations)}

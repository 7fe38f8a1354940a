"""Registration CRUD and status endpoints"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from regdesk.config import config
from regdesk.models.database import get_db
from regdesk.models.registration import (
    BatchStatusUpdate,
    RegistrationCreate,
    RegistrationUpdate,
    StatusUpdate,
    is_expired_for,
    serialize_registration,
)
from regdesk.models.registration_fields import REGISTRATION_FIELDS
from regdesk.services.exceptions import RegistrationNotFoundError, StoreError
from regdesk.services.query_service import RegistrationQuery
from regdesk.services.registration_service import (
    RegistrationService,
    parse_registration_id,
)

router = APIRouter(prefix="/registrations", tags=["Registrations"])

logger = logging.getLogger(__name__)


def get_registration_service(db: Session = Depends(get_db)) -> RegistrationService:
    return RegistrationService(db, config["ticket_sequence_start"])


def _parse_id(registration_id: str):
    try:
        return parse_registration_id(registration_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("")
async def list_registrations(
    search: str = Query("", description="Substring of name, email, profession, id or ticket"),
    status: str = Query("all", description="all, upcoming, pending or completed"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    sort_key: Optional[str] = Query(None, alias="sortKey"),
    sort_asc: bool = Query(True, alias="sortAsc"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=500),
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """List registrations matching the search, status and date filters"""
    try:
        query = RegistrationQuery(
            search=search,
            status=status,
            start_date=start_date,
            end_date=end_date,
            sort_key=sort_key,
            sort_asc=sort_asc,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = registration_service.query_registrations(query)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "success": True,
        "data": [serialize_registration(r) for r in result.items],
        "total": result.total,
        "page": page,
        "pageSize": page_size,
    }


@router.get("/fields")
async def list_registration_fields():
    """Describe every registration field and the widget used to edit it"""
    return {"success": True, "data": [spec.to_dict() for spec in REGISTRATION_FIELDS]}


@router.post("", status_code=201)
async def create_registration(
    body: RegistrationCreate,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Create a registration and assign its ticket number"""
    try:
        registration = registration_service.create_registration(body)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": serialize_registration(registration)}


@router.put("/status")
async def update_status_batch(
    body: BatchStatusUpdate,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Set one status on several registrations; all are updated or none"""
    if not body.ids:
        raise HTTPException(status_code=400, detail="At least one registration id is required")
    registration_ids = list(dict.fromkeys(_parse_id(rid) for rid in body.ids))

    try:
        registrations = registration_service.update_status_batch(
            registration_ids, body.status
        )
    except RegistrationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": [serialize_registration(r) for r in registrations]}


@router.get("/{registration_id}")
async def get_registration(
    registration_id: str,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Get one registration by ID"""
    rid = _parse_id(registration_id)
    try:
        registration = registration_service.get_registration(rid)
    except RegistrationNotFoundError:
        raise HTTPException(status_code=404, detail="Registration not found")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": serialize_registration(registration)}


@router.put("/{registration_id}")
async def update_status(
    registration_id: str,
    body: StatusUpdate,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Update the status of a registration; isExpired follows the status"""
    rid = _parse_id(registration_id)
    if body.is_expired is not None and body.is_expired != is_expired_for(body.status):
        raise HTTPException(
            status_code=400,
            detail="isExpired must be true exactly when status is 'completed'",
        )

    try:
        registration = registration_service.update_status(rid, body.status)
    except RegistrationNotFoundError:
        raise HTTPException(status_code=404, detail="Registration not found")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": serialize_registration(registration)}


@router.patch("/{registration_id}")
async def update_registration(
    registration_id: str,
    body: RegistrationUpdate,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Edit the contact and program fields of a registration"""
    rid = _parse_id(registration_id)
    try:
        registration = registration_service.update_registration(rid, body)
    except RegistrationNotFoundError:
        raise HTTPException(status_code=404, detail="Registration not found")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "data": serialize_registration(registration)}


@router.delete("/{registration_id}")
async def delete_registration(
    registration_id: str,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """Permanently delete a registration"""
    rid = _parse_id(registration_id)
    try:
        registration_service.delete_registration(rid)
    except RegistrationNotFoundError:
        raise HTTPException(status_code=404, detail="Registration not found")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True}

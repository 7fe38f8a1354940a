"""Export endpoint producing Excel and PDF reports"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlmodel import Session

from regdesk.config import config
from regdesk.models.database import get_db
from regdesk.services.exceptions import EmptyExportError, StoreError
from regdesk.services.registration_service import (
    RegistrationService,
    parse_registration_ids,
)
from regdesk.services.report_service import ExportFormat, build_report

router = APIRouter(tags=["Export"])

logger = logging.getLogger(__name__)


@router.get("/export")
async def export_registrations(
    format: Optional[str] = Query(None, description="pdf or excel"),
    ids: Optional[str] = Query(None, description="Comma separated ids or 'all'"),
    db: Session = Depends(get_db),
):
    """Download the selected registrations as an attachment"""
    try:
        export_format = ExportFormat.parse(format)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not ids:
        raise HTTPException(status_code=400, detail="ids is required ('all' or a list)")

    registration_service = RegistrationService(db, config["ticket_sequence_start"])
    try:
        if ids.strip().lower() == "all":
            registrations = registration_service.list_registrations()
        else:
            try:
                registration_ids = parse_registration_ids(ids)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            registrations = registration_service.get_registrations_by_ids(
                registration_ids
            )
    except StoreError:
        raise HTTPException(status_code=500, detail="Failed to fetch data for export")

    try:
        report = build_report(
            registrations, export_format, filename_stem=config["export_filename"]
        )
    except EmptyExportError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info(f"Exporting {len(registrations)} registrations as {report.filename}")
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": report.headers["Content-Disposition"]},
    )

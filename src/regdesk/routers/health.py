from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from sqlmodel import Session, text

from regdesk.config import config

health = APIRouter()


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "regdesk",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
    }


@health.get("/health/detailed")
async def detailed_health_check(request: Request):
    """Detailed health check with database connectivity"""
    health_status = {
        "status": "healthy",
        "service": "regdesk",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
        "checks": {},
    }

    # Database connectivity check
    try:
        with Session(request.app.state.engine) as session:
            result = session.exec(text("SELECT 1")).first()
            health_status["checks"]["database"] = "healthy" if result else "unhealthy"
    except Exception as e:
        health_status["checks"]["database"] = f"unhealthy: {str(e)}"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status

from __future__ import annotations

from fastapi import APIRouter

from employee_facade.core.config import settings
from employee_facade.services.employee_api_client import employee_api_client

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    if employee_api_client.initialized:
        ok = await employee_api_client.check_connection()
        services["employee_api"] = "ok" if ok else "error"
    else:
        services["employee_api"] = "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}

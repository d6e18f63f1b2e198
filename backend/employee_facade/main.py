from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from employee_facade.api.errors import register_exception_handlers
from employee_facade.api.v1.router import api_router
from employee_facade.core.config import settings
from employee_facade.services.employee_api_client import employee_api_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        await employee_api_client.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize EmployeeApiClient — continuing without upstream")
    yield
    await employee_api_client.close()


app = FastAPI(
    title="Employee Directory API",
    description="Rate-limit tolerant facade over the employee directory",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Directory API"}

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.testclient import TestClient

from employee_facade.main import app
from employee_facade.services.employee_api_client import EmployeeApiClient
from employee_facade.services.retry_policy import RetryPolicy

TEST_API_URL = "http://upstream.test/api/v1/employee"

SAMPLE_UPSTREAM_EMPLOYEE = {
    "id": "8434ca78-fe18-4718-ab6f-b62ed53a11bd",
    "employee_name": "John",
    "employee_salary": 999,
    "employee_age": 30,
    "employee_title": "Engineer",
    "employee_email": "john@company.com",
}


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=4, initial_delay=30.0, max_delay=90.0, multiplier=2.0, jitter_ratio=0.5)


@pytest.fixture
def api_client(retry_policy: RetryPolicy) -> EmployeeApiClient:
    api = EmployeeApiClient()
    api.initialized = True
    api.base_url = TEST_API_URL
    api.retry_policy = retry_policy
    api.sleep = AsyncMock()
    return api


def make_response(status: int, body: object = None, text: str = "") -> AsyncMock:
    """An ``async with session.request(...)`` context yielding a canned response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)

    context = AsyncMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = None
    return context


def mock_client_session(*responses: AsyncMock) -> tuple[AsyncMock, MagicMock]:
    """Patch target for ``aiohttp.ClientSession`` replaying ``responses`` in order."""
    session = MagicMock()
    session.request.side_effect = list(responses)

    client_session = AsyncMock()
    client_session.__aenter__.return_value = session
    client_session.__aexit__.return_value = None
    return client_session, session

"""HTTP client for the upstream employee directory.

Every call goes through one retry loop: HTTP 429 is retried with jittered
exponential backoff until ``RetryPolicy.max_attempts`` is used up, everything
else fails on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

import aiohttp
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
)

from employee_facade.core.config import Settings
from employee_facade.models.employee import EmployeeCreationRequest, EmployeeDeletionRequest
from employee_facade.services.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)


class EmployeeApiError(Exception):
    pass


class RateLimitedError(EmployeeApiError):
    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} was rate limited")


class RetriesExhaustedError(EmployeeApiError):
    def __init__(self, attempts: int, waited_seconds: float) -> None:
        self.attempts = attempts
        self.waited_seconds = waited_seconds
        super().__init__(
            f"Employee API still rate limited after {attempts} attempts "
            f"({waited_seconds:.1f}s spent in backoff)"
        )


class UpstreamUnavailableError(EmployeeApiError):
    pass


class UpstreamProtocolError(EmployeeApiError):
    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


def _log_retry(retry_state: RetryCallState) -> None:
    method, url = retry_state.args[:2]
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        "Employee API rate limited on %s %s (attempt %d), retrying in %.1fs",
        method,
        url,
        retry_state.attempt_number,
        delay,
    )


class EmployeeApiClient:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 30.0
        self.retry_policy = RetryPolicy()
        self.sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.EMPLOYEE_API_URL:
            logger.warning("Employee API URL missing — EmployeeApiClient not initialized")
            return

        self.base_url = settings.EMPLOYEE_API_URL.rstrip("/")
        self.timeout_seconds = settings.EMPLOYEE_API_TIMEOUT_SECONDS
        self.retry_policy = RetryPolicy.from_settings(settings)
        self.initialized = True
        logger.info(
            "EmployeeApiClient initialized (url=%s, max_attempts=%d)",
            self.base_url,
            self.retry_policy.max_attempts,
        )

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""

    async def request(
        self,
        method: str,
        path: str = "",
        json: dict[str, Any] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> Any:
        """Run one logical upstream operation and return the envelope's ``data``.

        Returns ``None`` for a DELETE, and for a 404 when ``allow_not_found``
        is set.

        Raises:
            RetriesExhaustedError: still rate limited after the last attempt.
            UpstreamUnavailableError: the upstream could not be reached.
            UpstreamProtocolError: any other error status or body shape.
        """
        if not self.initialized:
            raise RuntimeError("EmployeeApiClient not initialized")

        url = f"{self.base_url}{path}"
        retryer = AsyncRetrying(
            stop=stop_after_attempt(self.retry_policy.max_attempts),
            wait=self.retry_policy,
            retry=retry_if_exception_type(RateLimitedError),
            before_sleep=_log_retry,
            sleep=self.sleep,
        )

        try:
            return await retryer(self._send, method, url, json, allow_not_found)
        except RetryError as err:
            attempts = err.last_attempt.attempt_number
            waited = retryer.statistics.get("idle_for", 0.0)
            logger.error("Giving up on %s %s after %d rate limited attempts", method, url, attempts)
            raise RetriesExhaustedError(attempts, waited) from err.last_attempt.exception()

    async def _send(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None,
        allow_not_found: bool,
    ) -> Any:
        logger.debug("Employee API request: %s %s", method, url)

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, json=payload) as response:
                    if response.status == 429:
                        raise RateLimitedError(method, url)

                    if response.status == 404 and allow_not_found:
                        return None

                    if response.status >= 400:
                        error_text = await response.text()
                        raise UpstreamProtocolError(
                            f"{method} {url} failed: {response.status} - {error_text}",
                            status=response.status,
                        )

                    if method == "DELETE":
                        return None

                    try:
                        body = await response.json(content_type=None)
                    except ValueError as err:
                        raise UpstreamProtocolError(
                            f"{method} {url} returned a body that is not JSON",
                            status=response.status,
                        ) from err
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as err:
            logger.error("Employee API unreachable on %s %s: %s", method, url, err)
            raise UpstreamUnavailableError(f"Employee API unreachable: {err}") from err
        except aiohttp.ClientError as err:
            logger.error("Employee API transport error on %s %s: %s", method, url, err)
            raise UpstreamProtocolError(f"{method} {url} failed: {err}") from err

        if not isinstance(body, dict) or "data" not in body:
            raise UpstreamProtocolError(f"{method} {url} returned an unexpected body: {body!r}")
        return body["data"]

    async def list_employees(self) -> list[dict[str, Any]]:
        data = await self.request("GET")
        if not isinstance(data, list):
            raise UpstreamProtocolError(f"Employee list is not a list: {data!r}")
        return data

    async def get_employee(self, employee_id: str) -> dict[str, Any] | None:
        if not employee_id.strip():
            # "{base}/" would hit the list endpoint
            return None
        return await self.request("GET", f"/{quote(employee_id, safe='')}", allow_not_found=True)

    async def create_employee(self, creation: EmployeeCreationRequest) -> dict[str, Any]:
        return await self.request("POST", json=creation.model_dump())

    async def delete_employee(self, deletion: EmployeeDeletionRequest) -> None:
        await self.request("DELETE", json=deletion.model_dump())

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False
        try:
            await self._send("GET", self.base_url, None, False)
            return True
        except RateLimitedError:
            # busy, but reachable
            return True
        except EmployeeApiError:
            logger.exception("Employee API connection check failed")
            return False


employee_api_client = EmployeeApiClient()

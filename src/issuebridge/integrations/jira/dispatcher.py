"""JiraDispatcher - Authenticated POSTs to the JIRA REST API."""

from __future__ import annotations

import base64
import json
from enum import StrEnum

import httpx

from issuebridge.logging import get_logger, sanitize_for_log, truncate_output

logger = get_logger("integrations.jira")


class DispatchOutcome(StrEnum):
    """How a tracker response is reported."""

    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    ERROR = "error"


def classify_status(status_code: int) -> DispatchOutcome:
    if status_code in (200, 201):
        return DispatchOutcome.SUCCESS
    if status_code == 401:
        return DispatchOutcome.UNAUTHORIZED
    return DispatchOutcome.ERROR


def basic_auth(username: str | None, password: str | None) -> str:
    """URL-safe base64 of "username:password"; missing values become empty."""
    raw = f"{username or ''}:{password or ''}".encode()
    return base64.urlsafe_b64encode(raw).decode("ascii")


def _parsed_body(response: httpx.Response) -> str:
    try:
        parsed = response.json()
    except ValueError:
        return response.text
    if isinstance(parsed, str):
        return parsed
    return json.dumps(parsed)


class JiraDispatcher:
    """Sends one JSON POST per call and reports the outcome as a message.

    Tracker-side failures are never raised: they come back as a log line.
    Invalid URLs are logged and reported the same way. Transport failures
    (connection refused, timeouts) propagate to the caller.
    """

    def __init__(
        self,
        username: str | None,
        password: str | None,
        service_name: str = "JiraService",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            username: JIRA user name
            password: JIRA password or API token
            service_name: Prefix for every reported message
            timeout: Request timeout in seconds
            transport: Custom httpx transport (for testing)
        """
        self.username = username
        self.password = password
        self.service_name = service_name
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Basic {basic_auth(self.username, self.password)}",
        }

    def send(self, url: str, message: str) -> str:
        """POST a JSON message to url.

        Args:
            url: Full JIRA REST endpoint
            message: JSON-encoded request body

        Returns:
            Human-readable outcome, also logged at INFO
        """
        logger.debug("POST %s", sanitize_for_log(url))
        try:
            response = self.client.post(url, content=message, headers=self.headers)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            return self.report_invalid_url(str(e), url)

        return self.report(response.status_code, url, _parsed_body(response))

    def report(self, status_code: int, url: str, body: str) -> str:
        """Build, log and return the message for a tracker response."""
        outcome = classify_status(status_code)
        if outcome is DispatchOutcome.SUCCESS:
            message = f"{self.service_name} SUCCESS {status_code}: Successfully posted to {url}."
        elif outcome is DispatchOutcome.UNAUTHORIZED:
            message = (
                f"{self.service_name} ERROR 401: Unauthorized. Check the {self.username} "
                "credentials and JIRA access permissions and try again."
            )
        else:
            message = f"{self.service_name} ERROR {status_code}: {body}"

        logger.info(truncate_output(sanitize_for_log(message)))
        return message

    def report_invalid_url(self, reason: str, url: str) -> str:
        message = f"{self.service_name} ERROR: {reason}. Hostname: {url}."
        logger.info(sanitize_for_log(message))
        return message

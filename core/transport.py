# =============================================================================
# core/transport.py  —  Authenticated HTTP calls to the XAPIHub API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the httpx client: base URL, bearer header, fixed timeout.  It sends
#   one request and hands back the decoded JSON body.  It knows nothing about
#   organizations, projects or catalogues.
#
# FAILURES:
#   Anything that goes wrong (timeout, connection error, non-2xx status, a
#   body that is not JSON) is logged and raised as a TransportError that
#   carries the diagnostic context: status code, status text, response body
#   and request URL.  core/xapihub_client.py catches TransportError and turns
#   it into a Failure value, so nothing from here reaches the MCP tools as an
#   exception.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import XAPIHubConfig

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0  # seconds


class TransportError(Exception):
    """A request to XAPIHub did not produce a usable JSON response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        status_text: str = "",
        body: str = "",
        url: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        self.url = url


class Transport:
    """Performs raw requests against the configured XAPIHub base URL.

    Args:
        config: Base URL and bearer token.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by the tests to plug in
            httpx.MockTransport instead of the network.
    """

    def __init__(
        self,
        config: XAPIHubConfig,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = config.base_url
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        An empty 2xx body decodes to None.

        Raises:
            TransportError: on timeout, network failure, non-2xx status or
                a body that is not valid JSON.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            error = TransportError(
                f"timeout of {self.timeout}s exceeded",
                url=_request_url(e, url),
            )
            _log_error(method, error)
            raise error from e
        except httpx.HTTPStatusError as e:
            response = e.response
            error = TransportError(
                str(e),
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
                url=str(response.request.url),
            )
            _log_error(method, error)
            raise error from e
        except httpx.HTTPError as e:
            error = TransportError(str(e) or type(e).__name__, url=_request_url(e, url))
            _log_error(method, error)
            raise error from e

        if not response.content.strip():
            logger.debug("%s %s returned an empty body", method, response.request.url)
            return None

        try:
            data = response.json()
        except ValueError as e:
            error = TransportError(
                f"Malformed JSON in response body: {e}",
                body=response.text,
                url=str(response.request.url),
            )
            _log_error(method, error)
            raise error from e

        logger.debug("Raw response for %s %s: %s", method, response.request.url, data)
        return data


def _request_url(exc: httpx.HTTPError, fallback: str) -> str:
    # .request raises RuntimeError when the exception was built without one.
    try:
        return str(exc.request.url)
    except RuntimeError:
        return fallback


def _log_error(method: str, error: TransportError) -> None:
    logger.error(
        "XAPIHub API error: %s %s status=%s status_text=%r message=%r body=%r",
        method,
        error.url,
        error.status_code,
        error.status_text,
        error.message,
        error.body[:1000],
    )

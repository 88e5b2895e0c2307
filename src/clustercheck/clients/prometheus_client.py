"""Prometheus HTTP API client for instant queries."""

from typing import Any

import httpx

from clustercheck.core.exceptions import PrometheusError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)

# Value returned when a query matches no series.
NO_DATA_VALUE = "0"


class PrometheusClient:
    """Thin async wrapper around the Prometheus ``/api/v1/query`` endpoint.

    Every call is a single attempt bounded by ``timeout``. Proxy settings are
    taken from the environment (``HTTPS_PROXY`` and friends).
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        password: str | None = None,
        verify_tls: bool = False,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Prometheus client.

        Args:
            url: Base URL of the Prometheus API (e.g. https://127.0.0.1:9090)
            username: Basic auth username (optional)
            password: Basic auth password (optional)
            verify_tls: Validate the server certificate
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._auth: httpx.BasicAuth | None = None
        self.set_credentials(username, password)

        self._client = httpx.AsyncClient(
            verify=verify_tls,
            timeout=timeout,
            trust_env=True,
            transport=transport,
        )

        logger.debug("prometheus_client_initialized", url=self.url, verify_tls=verify_tls)

    def set_credentials(self, username: str | None, password: str | None) -> None:
        """Set basic auth credentials for subsequent queries.

        Args:
            username: Basic auth username
            password: Basic auth password
        """
        if username or password:
            self._auth = httpx.BasicAuth(username or "", password or "")
        else:
            self._auth = None

    async def query(self, expression: str) -> dict[str, Any]:
        """Run an instant query and return the decoded ``data`` object.

        Args:
            expression: PromQL expression

        Returns:
            The ``data`` member of the Prometheus response

        Raises:
            PrometheusError: On transport, HTTP or decode failure
        """
        endpoint = f"{self.url}/api/v1/query"
        logger.debug("querying_prometheus", endpoint=endpoint, query=expression)

        try:
            response = await self._client.get(
                endpoint, params={"query": expression}, auth=self._auth
            )
        except httpx.TimeoutException as e:
            logger.error("prometheus_query_timeout", query=expression, timeout=self.timeout)
            raise PrometheusError(f"request timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            logger.error("prometheus_query_failed", query=expression, error=str(e))
            raise PrometheusError(f"request failed: {e}") from e

        logger.debug(
            "prometheus_response_received",
            status_code=response.status_code,
            body=response.text[:512],
        )

        try:
            body = response.json()
        except ValueError as e:
            if response.status_code >= 400:
                raise PrometheusError(f"HTTP {response.status_code}") from e
            raise PrometheusError(f"malformed response: {e}") from e

        if not isinstance(body, dict):
            raise PrometheusError("malformed response: expected a JSON object")

        if body.get("status") == "error" or response.status_code >= 400:
            error_type = body.get("errorType", f"HTTP {response.status_code}")
            raise PrometheusError(f"{error_type}: {body.get('error', 'query rejected')}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise PrometheusError("malformed response: missing data")

        return data

    async def query_scalar(self, expression: str) -> str:
        """Run an instant query and return the first sample value as text.

        Args:
            expression: PromQL expression

        Returns:
            Value of the first result series, "0" if there is none

        Raises:
            PrometheusError: On transport, HTTP or decode failure
        """
        data = await self.query(expression)
        result_type = data.get("resultType")
        result = data.get("result")

        try:
            if result_type in ("scalar", "string"):
                # Scalar results are a bare [timestamp, "value"] pair
                return str(result[1])

            if not isinstance(result, list):
                raise PrometheusError("malformed response: result is not a list")

            if not result:
                logger.debug("prometheus_no_data", query=expression)
                return NO_DATA_VALUE

            return str(result[0]["value"][1])

        except (KeyError, IndexError, TypeError) as e:
            raise PrometheusError(f"malformed response: {e}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

"""Unit tests for PrometheusAdapter."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from clustercheck.adapters.prometheus_adapter import PrometheusAdapter
from clustercheck.clients.prometheus_client import PrometheusClient
from clustercheck.core.config import PrometheusConfig
from clustercheck.core.exceptions import PrometheusError
from clustercheck.interfaces.credential_source import Credentials
from clustercheck.interfaces.exceptions import CredentialSourceError, MetricsProviderError


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock Prometheus HTTP client."""
    client = MagicMock(spec=PrometheusClient)
    client.query_scalar = AsyncMock(return_value="1")
    client.close = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_query_scalar_delegates(mock_client: MagicMock) -> None:
    """Test queries are passed through to the client."""
    adapter = PrometheusAdapter(mock_client)

    assert await adapter.query_scalar("up") == "1"
    mock_client.query_scalar.assert_awaited_once_with("up")


@pytest.mark.asyncio
async def test_query_error_wrapped(mock_client: MagicMock) -> None:
    """Test client errors become MetricsProviderError."""
    mock_client.query_scalar.side_effect = PrometheusError("request timed out after 10s")
    adapter = PrometheusAdapter(mock_client)

    with pytest.raises(MetricsProviderError, match="timed out"):
        await adapter.query_scalar("up")


@pytest.mark.asyncio
async def test_authenticate_without_source_is_noop(mock_client: MagicMock) -> None:
    """Test static credentials are left alone."""
    adapter = PrometheusAdapter(mock_client)

    await adapter.authenticate()

    mock_client.set_credentials.assert_not_called()


@pytest.mark.asyncio
async def test_authenticate_sets_resolved_credentials(mock_client: MagicMock) -> None:
    """Test resolved credentials are installed once."""
    source = MagicMock()
    source.resolve.return_value = Credentials(username="agent", password="pw")
    adapter = PrometheusAdapter(mock_client, credential_source=source)

    await adapter.authenticate()
    await adapter.authenticate()

    mock_client.set_credentials.assert_called_once_with("agent", "pw")
    source.resolve.assert_called_once()


@pytest.mark.asyncio
async def test_authenticate_failure_propagates(mock_client: MagicMock) -> None:
    """Test credential lookup failures raise CredentialSourceError."""
    source = MagicMock()
    source.resolve.side_effect = CredentialSourceError("Failed to get item from Bitwarden: locked")
    adapter = PrometheusAdapter(mock_client, credential_source=source)

    with pytest.raises(CredentialSourceError, match="Bitwarden"):
        await adapter.authenticate()


@pytest.mark.asyncio
async def test_from_config() -> None:
    """Test the client is built from the Prometheus config section."""
    config = PrometheusConfig(url="https://prom.example.test", username="u", password="p")

    adapter = PrometheusAdapter.from_config(config)

    assert adapter.client.url == "https://prom.example.test"
    assert adapter.client.timeout == 10.0
    assert adapter.client.verify_tls is False
    await adapter.close()

"""Unit tests for the Bitwarden CLI wrapper."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from clustercheck.clients.bitwarden import BitwardenCLI
from clustercheck.core.exceptions import SecretStoreError

ITEM = {
    "name": "Prometheus Agent RemoteWrite",
    "login": {"username": "remote-write", "password": "pw"},
}


def _completed(stdout: str) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["bw"], returncode=0, stdout=stdout, stderr="")


class TestGetItem:
    """Tests for get_item and get_login."""

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_get_item_passes_session(self, mock_run: MagicMock) -> None:
        """Test the item is read with the session token in the environment."""
        mock_run.return_value = _completed(json.dumps(ITEM))
        cli = BitwardenCLI(session="session-token")

        item = cli.get_item("Prometheus Agent RemoteWrite")

        assert item == ITEM
        args, kwargs = mock_run.call_args
        assert args[0] == ["bw", "get", "item", "Prometheus Agent RemoteWrite"]
        assert kwargs["env"]["BW_SESSION"] == "session-token"
        assert kwargs["check"] is True

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_get_login(self, mock_run: MagicMock) -> None:
        """Test username and password are extracted from the login block."""
        mock_run.return_value = _completed(json.dumps(ITEM))

        assert BitwardenCLI().get_login("x") == ("remote-write", "pw")

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_item_without_login(self, mock_run: MagicMock) -> None:
        """Test a secure note without login fields is rejected."""
        mock_run.return_value = _completed(json.dumps({"name": "note", "login": None}))

        with pytest.raises(SecretStoreError, match="no login credentials"):
            BitwardenCLI().get_login("note")

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_invalid_json(self, mock_run: MagicMock) -> None:
        """Test unparseable output raises SecretStoreError."""
        mock_run.return_value = _completed("You are not logged in.")

        with pytest.raises(SecretStoreError, match="Failed to parse"):
            BitwardenCLI().get_item("x")


class TestCommandFailures:
    """Tests for bw process failures."""

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_non_zero_exit(self, mock_run: MagicMock) -> None:
        """Test a failing bw command raises SecretStoreError with stderr."""
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["bw"], output="", stderr="Vault is locked.\n"
        )

        with pytest.raises(SecretStoreError, match="Vault is locked."):
            BitwardenCLI().get_item("x")

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_missing_binary(self, mock_run: MagicMock) -> None:
        """Test a missing bw binary raises SecretStoreError."""
        mock_run.side_effect = FileNotFoundError("bw")

        with pytest.raises(SecretStoreError, match="not found"):
            BitwardenCLI().get_item("x")

    @patch("clustercheck.clients.bitwarden.subprocess.run")
    def test_timeout(self, mock_run: MagicMock) -> None:
        """Test a hanging bw command raises SecretStoreError."""
        mock_run.side_effect = subprocess.TimeoutExpired(["bw"], 5)

        with pytest.raises(SecretStoreError, match="timed out"):
            BitwardenCLI(timeout=5).get_item("x")

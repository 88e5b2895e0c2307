"""Bitwarden CLI wrapper for reading vault items."""

import json
import os
import subprocess
from typing import Any

from clustercheck.core.exceptions import SecretStoreError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class BitwardenCLI:
    """Wrapper for the ``bw`` command-line tool.

    The vault must already be unlocked; the session token is passed to the
    child process as ``BW_SESSION``.
    """

    def __init__(self, session: str | None = None, binary: str = "bw", timeout: float = 30.0):
        """Initialize Bitwarden wrapper.

        Args:
            session: Unlocked vault session token (optional)
            binary: Name or path of the bw executable
            timeout: Command timeout in seconds
        """
        self.session = session
        self.binary = binary
        self.timeout = timeout

        logger.debug("bitwarden_cli_initialized", binary=binary, has_session=bool(session))

    def _run_command(self, args: list[str]) -> subprocess.CompletedProcess:
        """Run a bw command.

        Args:
            args: Command arguments

        Returns:
            CompletedProcess instance

        Raises:
            SecretStoreError: If command fails
        """
        cmd = [self.binary] + args

        env = dict(os.environ)
        if self.session:
            env["BW_SESSION"] = self.session

        logger.debug("running_bw_command", command=" ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                env=env,
                timeout=self.timeout,
            )

            logger.debug("bw_command_completed", returncode=result.returncode)
            return result

        except subprocess.CalledProcessError as e:
            logger.error(
                "bw_command_failed",
                command=" ".join(cmd),
                returncode=e.returncode,
                stderr=e.stderr,
            )
            raise SecretStoreError(f"bw command failed: {(e.stderr or e.stdout).strip()}") from e
        except subprocess.TimeoutExpired as e:
            logger.error("bw_command_timeout", command=" ".join(cmd), timeout=self.timeout)
            raise SecretStoreError(f"bw command timed out after {self.timeout:g}s") from e
        except FileNotFoundError as e:
            logger.error("bw_not_found", binary=self.binary)
            raise SecretStoreError(
                "bw command not found. Please install the Bitwarden CLI."
            ) from e

    def get_item(self, name: str) -> dict[str, Any]:
        """Get a vault item by name.

        Args:
            name: Item name or id

        Returns:
            Decoded item JSON

        Raises:
            SecretStoreError: If the item cannot be read or parsed
        """
        result = self._run_command(["get", "item", name])

        try:
            item = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            logger.error("bw_item_parse_failed", item=name, error=str(e))
            raise SecretStoreError(f"Failed to parse Bitwarden item: {name}") from e

        if not isinstance(item, dict):
            raise SecretStoreError(f"Unexpected Bitwarden item format: {name}")

        logger.debug("bw_item_retrieved", item=name)
        return item

    def get_login(self, name: str) -> tuple[str, str]:
        """Get the username and password of a login item.

        Args:
            name: Item name or id

        Returns:
            Tuple of (username, password)

        Raises:
            SecretStoreError: If the item has no login fields
        """
        login = self.get_item(name).get("login") or {}
        username = login.get("username")
        password = login.get("password")

        if username is None or password is None:
            raise SecretStoreError(f"Bitwarden item has no login credentials: {name}")

        return username, password

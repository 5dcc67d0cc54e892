"""Transports that deliver repository dispatch events to GitHub.

Two transports share the DispatchClient interface:
- GhCliClient shells out to ``gh api`` using the CLI's own authentication
- RestApiClient posts to the REST API with ``requests`` and a token
"""

import json
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import requests

from docdispatch.config.environment import EnvironmentConfig
from docdispatch.config.exceptions import ConfigurationError, MissingDependencyError
from docdispatch.config.models import DispatchTransport
from docdispatch.git.models import TargetRepository
from docdispatch.logging import get_logger

from .models import DispatchAuthenticationError, DispatchDeliveryError, DispatchResponse

logger = get_logger(__name__, component="dispatch")


class DispatchClient(ABC):
    """Base class for dispatch transports."""

    name = "base"

    @abstractmethod
    def check_ready(self) -> None:
        """
        Verify the transport can send before any job is processed.

        Raises:
            PreconditionError: If a tool or credential is missing
        """

    @abstractmethod
    def send(self, target: TargetRepository, body: Dict[str, Any]) -> DispatchResponse:
        """
        Send one dispatch request.

        Returns:
            DispatchResponse; ``ok`` is False when GitHub rejected the call

        Raises:
            DispatchDeliveryError: If the request could not be attempted
        """


class GhCliClient(DispatchClient):
    """Sends dispatches through the GitHub CLI.

    The request body is staged in a temporary file passed to
    ``gh api --input``; the file is removed whatever the outcome.
    """

    name = DispatchTransport.GH_CLI.value

    def __init__(
        self,
        executable: str = "gh",
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        """Initialize the client.

        Args:
            executable: Name or path of the gh binary
            runner: Replacement for subprocess.run (for testing)
        """
        self.executable = executable
        self.runner = runner or subprocess.run

    def _run(self, args) -> subprocess.CompletedProcess:
        return self.runner(
            [self.executable, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )

    def check_ready(self) -> None:
        try:
            result = self._run(["auth", "status"])
        except FileNotFoundError as exc:
            raise MissingDependencyError([self.executable]) from exc

        if result.returncode != 0:
            raise DispatchAuthenticationError(
                "GitHub CLI is not authenticated",
                suggestions=["Run 'gh auth login' to authenticate"],
            )

    def send(self, target: TargetRepository, body: Dict[str, Any]) -> DispatchResponse:
        fd, payload_path = tempfile.mkstemp(prefix="dispatch-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(body, fh)

            logger.debug(
                f"Executing: {self.executable} api {target.dispatches_endpoint} --input {payload_path}",
                extra={"event": "dispatch.request", "target": target.full_name},
            )
            result = self._run(
                [
                    "api",
                    target.dispatches_endpoint,
                    "--method",
                    "POST",
                    "--input",
                    payload_path,
                ]
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise DispatchDeliveryError(f"Failed to run {self.executable}: {exc}") from exc
        finally:
            if os.path.exists(payload_path):
                os.remove(payload_path)

        return DispatchResponse(
            ok=result.returncode == 0,
            status=result.returncode,
            output=(result.stdout or "").strip(),
        )


class RestApiClient(DispatchClient):
    """Sends dispatches straight to the GitHub REST API."""

    name = DispatchTransport.REST_API.value

    def __init__(
        self,
        token: Optional[str],
        api_url: str = "https://api.github.com",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "doc-change-dispatcher",
            }
        )

    def check_ready(self) -> None:
        if not self.token:
            raise DispatchAuthenticationError(
                "GitHub token is not configured",
                suggestions=[
                    "Set GITHUB_TOKEN in the environment or .env file",
                    "Or use --transport gh to rely on the GitHub CLI login",
                ],
            )

    def send(self, target: TargetRepository, body: Dict[str, Any]) -> DispatchResponse:
        url = f"{self.api_url}/{target.dispatches_endpoint}"
        logger.debug(
            f"HTTP POST request to {url}",
            extra={"event": "dispatch.request", "target": target.full_name, "url": url},
        )
        try:
            response = self._session.post(
                url,
                json=body,
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise DispatchDeliveryError(f"Request to {url} failed: {exc}") from exc

        return DispatchResponse(
            ok=response.status_code < 400,
            status=response.status_code,
            output=response.text.strip(),
        )


def build_client(env_config: EnvironmentConfig, transport: Optional[str] = None) -> DispatchClient:
    """
    Create the dispatch transport selected by CLI flag or environment.

    Raises:
        ConfigurationError: If the transport name is unknown
    """
    name = transport or env_config.dispatch_transport
    if name == DispatchTransport.GH_CLI.value:
        return GhCliClient()
    if name == DispatchTransport.REST_API.value:
        return RestApiClient(
            token=env_config.github_token,
            api_url=env_config.github_api_url,
            timeout=env_config.http_timeout,
        )

    supported = ", ".join(t.value for t in DispatchTransport)
    raise ConfigurationError(f"Unknown dispatch transport: {name}. Supported transports: {supported}")

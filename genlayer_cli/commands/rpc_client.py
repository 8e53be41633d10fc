"""
JSON-RPC client for the GenLayer simulator backend.
"""

import logging
import uuid
from typing import Any, Optional

import requests

from genlayer_cli.commands.constants import (
    DEFAULT_JSON_RPC_URL,
    DEFAULT_REQUEST_TIMEOUT,
    JSON_RPC_VERSION,
)
from genlayer_cli.commands.errors import ClientError, RequestTimeoutError

logger = logging.getLogger(__name__)

# Error code for a backend that is not accepting connections (yet)
CONNECTION_REFUSED = "CONNECTION_REFUSED"


class JsonRpcClient:
    """Thin JSON-RPC 2.0 client over ``requests``.

    ``request`` returns None for a non-OK HTTP answer, which polling callers
    read as "not ready yet". ``call`` is the strict variant used where an
    answer is required.
    """

    def __init__(
        self,
        url: str = DEFAULT_JSON_RPC_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _build_body(self, method: str, params: Optional[list]) -> dict[str, Any]:
        return {
            "jsonrpc": JSON_RPC_VERSION,
            "id": str(uuid.uuid4()),
            "method": method,
            "params": list(params or []),
        }

    def _post(self, method: str, params: Optional[list]) -> requests.Response:
        body = self._build_body(method, params)
        logger.debug("JSON-RPC %s -> %s params=%s", method, self.url, body["params"])
        try:
            return self.session.post(self.url, json=body, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"Request to {self.url} timed out after {self.timeout}s", url=self.url
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise ClientError(
                f"Fetch Error: {e}", url=self.url, code=CONNECTION_REFUSED
            ) from e
        except requests.exceptions.RequestException as e:
            raise ClientError(f"Fetch Error: {e}", url=self.url) from e

    def request(self, method: str, params: Optional[list] = None) -> Optional[Any]:
        """Send a request and return the parsed JSON body, or None on HTTP failure.

        Raises:
            ClientError: On transport failure.
        """
        response = self._post(method, params)
        if not response.ok:
            logger.debug(
                "JSON-RPC %s answered HTTP %s %s",
                method,
                response.status_code,
                response.reason,
            )
            return None
        return response.json()

    def call(self, method: str, params: Optional[list] = None) -> Any:
        """Send a request that must succeed.

        Returns:
            The parsed JSON body.

        Raises:
            ClientError: On transport failure, non-OK HTTP status, or a
                JSON-RPC error object in the response.
        """
        response = self._post(method, params)
        if not response.ok:
            raise ClientError(
                response.reason or f"HTTP {response.status_code}",
                url=self.url,
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise ClientError(
                f"Invalid JSON-RPC response: {e}",
                url=self.url,
                status_code=response.status_code,
            ) from e
        if isinstance(payload, dict) and payload.get("error"):
            error = payload["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ClientError(
                message or "JSON-RPC error", url=self.url, details={"error": error}
            )
        return payload

"""Client side of the remote text-transformation backend.

The backend owns the actual rewriting. This module only sends a
TransformationRequest and returns the rewritten text, raising
TransformationError on any failure so callers can report it before any
comparison is computed.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from humandiff.rewrite.settings import TransformationRequest

logger = logging.getLogger(__name__)

TRANSFORM_PATH = "/api/transform"


class TransformationError(RuntimeError):
    """Raised when the transformation backend fails or returns an unusable payload."""


def normalize_path(path: str) -> str:
    """Return path with exactly one leading slash."""
    return "/" + path.lstrip("/")


class TransformationProvider:
    """Interface for anything that turns a request into rewritten text."""

    def transform(self, request: TransformationRequest) -> str:
        raise NotImplementedError

    def close(self) -> None:
        pass


class StaticTransformationProvider(TransformationProvider):
    """Provider backed by a plain callable taking the request."""

    def __init__(self, func: Callable[[TransformationRequest], str]):
        self.func = func

    def transform(self, request: TransformationRequest) -> str:
        return self.func(request)


class HttpTransformationProvider(TransformationProvider):
    """Provider that posts requests to the rewriting backend over HTTP.

    The backend answers either with the response object itself or with an
    envelope of the form {"success": true, "data": {...}}; both are accepted.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        api_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        path: str = TRANSFORM_PATH,
    ):
        """Initialize the provider.

        Args:
            base_url: Backend root URL, e.g. http://localhost:5000
            timeout: Request timeout in seconds
            api_key: Optional bearer token sent with every request
            client: Preconfigured httpx client (mainly for tests)
            path: Endpoint path on the backend
        """
        self.base_url = base_url.rstrip("/")
        self.path = normalize_path(path)
        self.timeout = timeout
        self.api_key = api_key
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def transform(self, request: TransformationRequest) -> str:
        """Send the request and return the humanized text.

        Raises:
            TransformationError: On transport errors, non-2xx statuses, or a
                payload without humanizedText
        """
        payload = request.model_dump(mode="json", by_alias=True)
        logger.info(f"Requesting {request.mode.value} transformation from {self.url}")

        try:
            response = self.client.post(self.url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Transformation request failed: {e}")
            raise TransformationError(f"Could not reach transformation service: {e}") from e

        if response.is_error:
            detail = response.text or response.reason_phrase
            logger.error(f"Transformation service returned {response.status_code}")
            raise TransformationError(f"{response.status_code}: {detail}")

        try:
            body = response.json()
        except ValueError as e:
            raise TransformationError("Transformation service returned invalid JSON") from e

        return self._extract_text(body)

    @staticmethod
    def _extract_text(body: Any) -> str:
        if isinstance(body, dict):
            if body.get("success") is False:
                raise TransformationError(str(body.get("error") or "Transformation failed"))
            if isinstance(body.get("data"), dict):
                body = body["data"]

        if not isinstance(body, dict):
            raise TransformationError("Unexpected response from transformation service")

        text = body.get("humanizedText")
        if not isinstance(text, str):
            raise TransformationError("Response is missing humanizedText")
        return text

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

"""HTTP transport used by the paginator"""
from typing import Optional, Dict, Mapping, Protocol, Any
import logging

import requests

from .exceptions import CdssConnectionError
from .types import CdssConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class Response(Protocol):
    """What the paginator needs from a response (requests.Response fits)"""
    ok: bool
    status_code: int
    reason: str

    def json(self) -> Any: ...


class Transport(Protocol):
    def get(self, path: str, query: Mapping[str, str]) -> Response: ...


class HttpTransport:
    """Performs GET requests against the CDSS REST API"""

    def __init__(
        self,
        config: Optional[CdssConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the transport

        Args:
            config: Client configuration (defaults to DEFAULT_CONFIG)
            session: Session to reuse; a new one is created if omitted
        """
        self.config = config or DEFAULT_CONFIG
        self._session = session or requests.Session()
        self._session.headers.update(self._build_headers())

    def _build_headers(self) -> Dict[str, str]:
        """Build request headers"""
        headers = {
            'Accept': 'application/json',
            'User-Agent': self.config.user_agent
        }

        if self.config.api_key:
            headers['Token'] = self.config.api_key

        return headers

    def get(self, path: str, query: Mapping[str, str]) -> requests.Response:
        """
        Send one GET request

        Non-success statuses are returned as-is; only failures to get any
        response at all are raised.

        Args:
            path: Endpoint path relative to the base URL
            query: Wire-format query parameters

        Returns:
            The requests.Response

        Raises:
            CdssConnectionError: On timeouts and other network errors
        """
        url = f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"
        params = dict(query)
        if self.config.api_key:
            params['apiKey'] = self.config.api_key

        log = logger.info if self.config.debug else logger.debug
        log(f"GET {url} params={params}")

        try:
            return self._session.get(url, params=params, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            raise CdssConnectionError(f"Request timeout after {self.config.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise CdssConnectionError(f"Request failed: {str(e)}") from e

    def close(self) -> None:
        """Close the underlying HTTP session"""
        self._session.close()

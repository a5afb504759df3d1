# soapcall/transport.py
"""
HTTP transports for SOAP requests.

The client depends only on the Transport protocol: one call that takes a
fully formed HttpRequest and returns an HttpResponse, or raises
TransportError. RequestsTransport is the default implementation, built on
requests. Connection pooling, TLS verification, timeouts and retry policy all
live here, not in the client.
"""

import logging
from types import TracebackType
from typing import Protocol, runtime_checkable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from soapcall.exceptions import TransportError
from soapcall.models import HttpRequest, HttpResponse

logger: logging.Logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can carry one HTTP request and return its response."""

    def send(self, request: HttpRequest) -> HttpResponse:
        """
        Perform the HTTP round-trip.

        Implementations must raise TransportError for connection-level
        failures and return the response for every HTTP status, including
        4xx and 5xx.
        """
        ...


class RequestsTransport:
    """
    Transport backed by a requests.Session.

    The session is safe to share between threads for the simple
    request/response use made of it here, so one RequestsTransport can serve
    concurrent callers.

    Attributes:
        session: The requests session used for every request.
        timeout: (connect_timeout, read_timeout) in seconds.
        verify_ssl: Whether TLS certificates are verified.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: tuple[float, float] = (10.0, 30.0),
        verify_ssl: bool = True,
        max_retries: int = 0,
        retry_backoff_factor: float = 0.5,
    ) -> None:
        """
        Create the transport.

        Args:
            session: Optional pre-configured session (auth, proxies, custom
                     adapters). If None, a session is created and owned by
                     this transport, and close() will close it.
            timeout: (connect_timeout, read_timeout) in seconds.
            verify_ssl: Whether to verify TLS certificates.
            max_retries: Retries for failed connections and 502/503/504
                         answers. 0 sends exactly one request per call.
            retry_backoff_factor: urllib3 backoff factor between retries.
        """
        self._owns_session: bool = session is None
        self.session: requests.Session = session if session is not None else requests.Session()
        self.timeout: tuple[float, float] = timeout
        self.verify_ssl: bool = verify_ssl

        if max_retries > 0:
            # POST is not retried by urllib3 unless explicitly allowed
            retry: Retry = Retry(
                total=max_retries,
                backoff_factor=retry_backoff_factor,
                status_forcelist=(502, 503, 504),
                allowed_methods=frozenset({'POST'}),
                raise_on_status=False,
            )
            adapter: HTTPAdapter = HTTPAdapter(max_retries=retry)
            self.session.mount('http://', adapter)
            self.session.mount('https://', adapter)
            logger.debug(
                'Mounted retry adapter (max_retries=%r, backoff=%r)',
                max_retries,
                retry_backoff_factor,
            )

    def send(self, request: HttpRequest) -> HttpResponse:
        """
        Send the request with requests and wrap the result.

        Raises:
            TransportError: For timeouts, connection failures and any other
                            requests.RequestException.
        """
        try:
            logger.debug(
                'Sending %s to %r (connect/read timeout=%r)',
                request.method,
                request.url,
                self.timeout,
            )

            response: requests.Response = self.session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )

            logger.debug(
                'Received HTTP %r (%d bytes) from %r',
                response.status_code,
                len(response.content),
                request.url,
            )

            return HttpResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                body=response.content,
            )

        except requests.exceptions.Timeout as timeout_error:
            logger.error(
                'Request to %r timed out after %r: %r',
                request.url,
                self.timeout,
                timeout_error,
            )
            raise TransportError(f'Request to {request.url} timed out') from timeout_error

        except requests.exceptions.RequestException as request_error:
            logger.error('Network error for %r: %r', request.url, request_error)
            raise TransportError(
                f'Request to {request.url} failed: {request_error}'
            ) from request_error

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self.session.close()
            logger.debug('Closed owned requests session')

    def __enter__(self) -> 'RequestsTransport':
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f'RequestsTransport(timeout={self.timeout}, verify_ssl={self.verify_ssl})'

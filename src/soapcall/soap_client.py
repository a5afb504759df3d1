# soapcall/soap_client.py
"""
Generic SOAP Action Client

This module provides a client that invokes a named action on a SOAP 1.1
endpoint: it turns an input value into a request envelope, POSTs it through a
transport, checks the HTTP status and decodes the action response into a
caller-supplied output value.
"""

import logging
from types import TracebackType
from typing import Any

from soapcall.decoder import decode_response, output_slots
from soapcall.envelope import EnvelopeBuilder
from soapcall.exceptions import RemoteHTTPError
from soapcall.field_resolver import build_action_request
from soapcall.models import ActionRequest, HttpRequest, HttpResponse
from soapcall.transport import RequestsTransport, Transport
from soapcall.utils import SoapCallConfig

# Set up module-level logger
logger: logging.Logger = logging.getLogger(__name__)

# How much of a non-2xx response body is kept on RemoteHTTPError
BODY_SNIPPET_LENGTH: int = 512

SOAP_CONTENT_TYPE: str = 'text/xml; charset="utf-8"'


class SoapClient:
    """
    Client for invoking actions on a single SOAP endpoint.

    The client is configuration only: the endpoint URL, the transport and the
    envelope builder are set at construction and never change. Each
    perform_action() call builds and discards its own request and response
    data, so one client can be shared between threads as long as its
    transport can.

    Attributes:
        endpoint_url: The URL every action is POSTed to.
        transport: The Transport carrying the HTTP round-trip.
        envelope_builder: Renders request envelopes.

    Usage:
        Context Manager (Recommended):
            >>> with SoapClient('http://192.168.1.1:49000/upnp/control/wanip') as client:
            >>>     reply = {'NewExternalIPAddress': ''}
            >>>     client.perform_action(
            >>>         'urn:schemas-upnp-org:service:WANIPConnection:1',
            >>>         'GetExternalIPAddress',
            >>>         {},
            >>>         reply,
            >>>     )
            >>> # The transport's session is closed when the block exits

        From a config file:
            >>> client = SoapClient.from_config(load_config('soapcall.yaml'))
    """

    def __init__(
        self,
        endpoint_url: str,
        transport: Transport | None = None,
        envelope_builder: EnvelopeBuilder | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            endpoint_url: The SOAP control URL.
            transport: Optional transport. Defaults to a RequestsTransport
                       with default timeouts and no retries.
            envelope_builder: Optional envelope builder, e.g. one loading a
                              custom templates directory.
        """
        self.endpoint_url: str = str(endpoint_url)
        self.transport: Transport = transport if transport is not None else RequestsTransport()
        self.envelope_builder: EnvelopeBuilder = (
            envelope_builder if envelope_builder is not None else EnvelopeBuilder()
        )
        logger.debug('SoapClient initialized for endpoint %r', self.endpoint_url)

    @classmethod
    def from_config(cls, config: SoapCallConfig) -> 'SoapClient':
        """
        Build a client and its RequestsTransport from a validated config.

        Args:
            config: A SoapCallConfig, typically from load_config().

        Returns:
            A client for config.endpoint.url.
        """
        transport: RequestsTransport = RequestsTransport(
            timeout=config.client.request_timeout,
            verify_ssl=config.client.verify_ssl,
            max_retries=config.client.max_retries,
            retry_backoff_factor=config.client.retry_backoff_factor,
        )
        return cls(str(config.endpoint.url), transport=transport)

    def _build_headers(self, action_request: ActionRequest) -> dict[str, str]:
        """Build the HTTP headers for an action request."""
        return {
            'Content-Type': SOAP_CONTENT_TYPE,
            'SOAPAction': action_request.soap_action,
        }

    def _build_http_request(self, action_request: ActionRequest) -> HttpRequest:
        """
        Render the envelope and wrap it in a POST request to the endpoint.

        Args:
            action_request: The resolved action and its fields.

        Returns:
            The HttpRequest to hand to the transport.
        """
        body: str = self.envelope_builder.build_request(action_request)
        return HttpRequest(
            method='POST',
            url=self.endpoint_url,
            headers=self._build_headers(action_request),
            body=body.encode('utf-8'),
        )

    def perform_action(
        self,
        namespace: str,
        action_name: str,
        input_value: Any,
        output: Any,
    ) -> None:
        """
        Invoke a SOAP action and decode its response into output.

        Exactly one HTTP request is sent. Any retry policy belongs to the
        transport.

        Args:
            namespace: Service type URI of the action (e.g.
                       'urn:schemas-upnp-org:service:WANIPConnection:1').
            action_name: Name of the action to invoke.
            input_value: Action arguments: a pydantic model, a dataclass
                         instance or a str-keyed mapping.
            output: Receives the response arguments: a pydantic model, a
                    dataclass instance or a mutable mapping whose keys name
                    the expected arguments.

        Raises:
            UnsupportedInputKindError: If input_value or output is of an
                                       unsupported kind. No request is sent.
            UnsupportedFieldValueError: If an input field is not a scalar.
                                        No request is sent.
            TransportError: If the transport fails.
            RemoteHTTPError: If the response status is not 2xx. output is
                             left untouched.
            MalformedXMLError: If the response body is not XML. output is
                               left untouched.
            UnexpectedStructureError: If the response has no
                                      Envelope/Body/{action}Response.
            RemoteFaultError: If the response carries a SOAP Fault.
        """
        logger.info('Performing SOAP action %r on %r', action_name, self.endpoint_url)

        # Fail on unusable arguments before anything goes on the wire
        action_request: ActionRequest = build_action_request(namespace, action_name, input_value)
        output_slots(output)

        http_request: HttpRequest = self._build_http_request(action_request)
        logger.debug('Request body for %r: %d bytes', action_name, len(http_request.body))

        http_response: HttpResponse = self.transport.send(http_request)

        if not http_response.ok:
            body_snippet: str = http_response.body[:BODY_SNIPPET_LENGTH].decode(
                'utf-8', errors='replace'
            )
            raise RemoteHTTPError(http_response.status_code, body_snippet)

        logger.debug(
            'Action %r answered HTTP %r (%d bytes)',
            action_name,
            http_response.status_code,
            len(http_response.body),
        )

        decode_response(http_response.body, action_name, output)
        logger.info('SOAP action %r completed successfully', action_name)

    def close(self) -> None:
        """Close the transport, if it supports closing."""
        close = getattr(self.transport, 'close', None)
        if callable(close):
            close()

    def __enter__(self) -> 'SoapClient':
        logger.debug('Entering SoapClient context manager')
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        """Close the transport; exceptions from the with block propagate."""
        logger.debug(
            'Exiting SoapClient context manager (exception occurred: %s)',
            exc_type is not None,
        )
        self.close()

    def __repr__(self) -> str:
        return f'SoapClient(endpoint={self.endpoint_url}, transport={self.transport!r})'

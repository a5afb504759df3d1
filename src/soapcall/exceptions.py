# soapcall/exceptions.py
"""
Exception hierarchy for SOAP action invocation.

Every error raised by the package derives from SoapError so callers can catch
the whole family with a single except clause, or pick out the specific stage
that failed (input resolution, transport, HTTP status, XML decoding).
"""


class SoapError(Exception):
    """Base class for all soapcall errors."""


class UnsupportedInputKindError(SoapError, TypeError):
    """
    Raised when an input or output value is neither record-like nor a
    string-keyed mapping.

    Always raised before any network activity takes place.
    """


class UnsupportedFieldValueError(SoapError, TypeError):
    """Raised when a field holds a value that cannot be rendered as flat text."""

    def __init__(self, field_name: str, value: object) -> None:
        self.field_name: str = field_name
        self.value_type: str = type(value).__name__
        super().__init__(
            f'Field {field_name!r} has unsupported value type {self.value_type!r}; '
            'only scalar values (str, int, float, Decimal, bool, date/time, None) '
            'can be sent'
        )


class TransportError(SoapError):
    """
    Raised by a transport when the HTTP round-trip itself fails.

    The original exception (connection refused, timeout, TLS failure, ...) is
    available as __cause__.
    """


class RemoteHTTPError(SoapError):
    """Raised when the remote party answers with a non-2xx HTTP status."""

    def __init__(self, status_code: int, body_snippet: str) -> None:
        self.status_code: int = status_code
        self.body_snippet: str = body_snippet
        super().__init__(f'HTTP {status_code} from SOAP endpoint: {body_snippet!r}')


class MalformedXMLError(SoapError):
    """Raised when the response body does not parse as XML."""


class UnexpectedStructureError(SoapError):
    """Raised when the response lacks the Envelope/Body/action-response nesting."""


class RemoteFaultError(SoapError):
    """Raised when the response Body carries a SOAP Fault."""

    def __init__(
        self, fault_code: str, fault_string: str, detail: str | None = None
    ) -> None:
        self.fault_code: str = fault_code
        self.fault_string: str = fault_string
        self.detail: str | None = detail
        super().__init__(f'SOAP Fault [{fault_code}]: {fault_string}')

# soapcall/__init__.py

from .decoder import decode_response
from .envelope import EnvelopeBuilder, build_envelope
from .exceptions import (
    MalformedXMLError,
    RemoteFaultError,
    RemoteHTTPError,
    SoapError,
    TransportError,
    UnexpectedStructureError,
    UnsupportedFieldValueError,
    UnsupportedInputKindError,
)
from .field_resolver import build_action_request, resolve_fields
from .models import ActionRequest, FieldDescriptor, HttpRequest, HttpResponse
from .soap_client import SoapClient
from .transport import RequestsTransport, Transport
from .utils import escape_xml_text, soap_tag

__all__: list[str] = [
    # decoder.py
    'decode_response',
    # envelope.py
    'EnvelopeBuilder',
    'build_envelope',
    # exceptions.py
    'MalformedXMLError',
    'RemoteFaultError',
    'RemoteHTTPError',
    'SoapError',
    'TransportError',
    'UnexpectedStructureError',
    'UnsupportedFieldValueError',
    'UnsupportedInputKindError',
    # field_resolver.py
    'build_action_request',
    'resolve_fields',
    # models.py
    'ActionRequest',
    'FieldDescriptor',
    'HttpRequest',
    'HttpResponse',
    # soap_client.py
    'SoapClient',
    # transport.py
    'RequestsTransport',
    'Transport',
    # utils
    'escape_xml_text',
    'soap_tag',
]

"""Pytest configuration and shared fixtures for soapcall tests."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import yaml

from soapcall.exceptions import TransportError
from soapcall.models import HttpRequest, HttpResponse
from soapcall.utils import SoapCallConfig

SOAP_PREFIX: str = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" '
    's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/"><s:Body>'
)
SOAP_SUFFIX: str = '</s:Body></s:Envelope>'


class FakeTransport:
    """Transport double that records every request and replays a canned answer."""

    def __init__(
        self,
        response: HttpResponse | None = None,
        error: TransportError | None = None,
    ) -> None:
        self.response: HttpResponse | None = response
        self.error: TransportError | None = error
        self.requests: list[HttpRequest] = []
        self.closed: bool = False

    def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    def close(self) -> None:
        self.closed = True

    @property
    def captured_request(self) -> HttpRequest:
        assert len(self.requests) == 1
        return self.requests[0]


@pytest.fixture
def myaction_response_xml() -> str:
    """A successful response for the 'myaction' action, indented like real devices send."""
    return """
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
    <s:Body>
        <u:myactionResponse xmlns:u="mynamespace">
            <A>valueA</A>
            <B>valueB</B>
        </u:myactionResponse>
    </s:Body>
</s:Envelope>
"""


@pytest.fixture
def soap_fault_xml() -> str:
    """A SOAP 1.1 fault response as returned by UPnP devices."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
    <s:Body>
        <s:Fault>
            <faultcode>s:Client</faultcode>
            <faultstring>UPnPError</faultstring>
            <detail>
                <UPnPError xmlns="urn:schemas-upnp-org:control-1-0">
                    <errorCode>401</errorCode>
                    <errorDescription>Invalid Action</errorDescription>
                </UPnPError>
            </detail>
        </s:Fault>
    </s:Body>
</s:Envelope>"""


@pytest.fixture
def fake_transport(myaction_response_xml: str) -> FakeTransport:
    """A transport answering HTTP 200 with the myaction response."""
    return FakeTransport(
        response=HttpResponse(
            status_code=200,
            headers={'Content-Type': 'text/xml; charset="utf-8"'},
            body=myaction_response_xml.encode('utf-8'),
        )
    )


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """A complete, valid configuration as it would appear in YAML."""
    return {
        'endpoint': {
            'url': 'https://device.example.com/control',
        },
        'client': {
            'request_timeout': [5, 15],
            'verify_ssl': True,
            'max_retries': 0,
            'retry_backoff_factor': 0.5,
        },
        'logging': {
            'console_level': 'INFO',
            'file_level': 'DEBUG',
            'file_path': 'test_soapcall.log',
        },
    }


@pytest.fixture
def sample_config(sample_config_dict: dict[str, Any]) -> SoapCallConfig:
    """Create a sample SoapCallConfig for testing."""
    return SoapCallConfig.model_validate(sample_config_dict)


@pytest.fixture
def temp_config_file(tmp_path: Path, sample_config_dict: dict[str, Any]) -> Path:
    """Create a temporary config file for testing."""
    config_path: Path = tmp_path / 'soapcall.yaml'
    config_path.write_text(yaml.safe_dump(sample_config_dict, sort_keys=False))
    return config_path


@pytest.fixture
def clean_package_logger() -> Iterator[logging.Logger]:
    """Give a test the package logger without handlers and restore it afterwards."""
    package_logger: logging.Logger = logging.getLogger('soapcall')
    saved_handlers: list[logging.Handler] = list(package_logger.handlers)
    saved_level: int = package_logger.level

    for handler in saved_handlers:
        package_logger.removeHandler(handler)

    yield package_logger

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(saved_level)

# soapcall/envelope.py
"""
SOAP 1.1 request envelope rendering.

Envelopes are rendered from a Jinja2 template. Rendering is deterministic:
the same namespace, action and fields always give byte-identical output,
which is also the exact HTTP payload sent to the remote party.
"""

import logging
from collections.abc import Sequence
from functools import cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from soapcall.models import ActionRequest, FieldDescriptor
from soapcall.utils import escape_xml_text

logger: logging.Logger = logging.getLogger(__name__)

SOAP_ENVELOPE_NAMESPACE: str = 'http://schemas.xmlsoap.org/soap/envelope/'
SOAP_ENCODING_STYLE: str = 'http://schemas.xmlsoap.org/soap/encoding/'

ENVELOPE_TEMPLATE_NAME: str = 'envelope.xml'


class EnvelopeBuilder:
    """
    Renders action requests into SOAP envelope strings.

    The Jinja2 environment is created once and shared by every call; the
    builder holds no per-call state.

    Attributes:
        jinja_env: The Jinja2 environment loading templates from the
                   package's templates directory.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        """
        Set up the template environment.

        Args:
            templates_dir: Optional directory holding envelope.xml. Defaults
                           to the templates directory shipped with the package.

        Raises:
            FileNotFoundError: If the templates directory does not exist.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / 'templates'

        if not templates_dir.exists():
            error_message: str = f'Templates directory not found at: {templates_dir}'
            logger.error(error_message)
            raise FileNotFoundError(error_message)

        # Autoescaping is off: markupsafe would also escape quotes, and the
        # action name and namespace are inserted verbatim. Element text goes
        # through the xml_text filter instead.
        self.jinja_env: Environment = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        self.jinja_env.filters['xml_text'] = escape_xml_text
        logger.debug('Jinja2 environment initialized with templates from: %r', templates_dir)

    def build(
        self,
        namespace: str,
        action_name: str,
        fields: Sequence[FieldDescriptor],
    ) -> str:
        """
        Render a complete SOAP request envelope.

        Args:
            namespace: Namespace URI bound to the 'u' prefix of the action
                       element. Inserted verbatim.
            action_name: Local name of the action element. Inserted verbatim.
            fields: Action arguments, rendered in the given order with their
                    values escaped.

        Returns:
            The envelope as a string, with no trailing newline.

        Example:
            >>> EnvelopeBuilder().build('urn:x', 'Ping', [FieldDescriptor(tag_name='A', raw_value='1')])
            '<?xml version="1.0" encoding="UTF-8"?>\\n<s:Envelope ...><s:Body><u:Ping xmlns:u="urn:x"><A>1</A></u:Ping></s:Body></s:Envelope>'
        """
        template: Template = self.jinja_env.get_template(ENVELOPE_TEMPLATE_NAME)
        rendered_xml: str = template.render(
            namespace=namespace,
            action_name=action_name,
            fields=fields,
        )
        logger.debug(
            'Rendered envelope for action %r with %d field(s)', action_name, len(fields)
        )
        return rendered_xml

    def build_request(self, action_request: ActionRequest) -> str:
        """Render the envelope for a prepared ActionRequest."""
        return self.build(
            action_request.namespace,
            action_request.action_name,
            action_request.fields,
        )


@cache
def _default_builder() -> EnvelopeBuilder:
    return EnvelopeBuilder()


def build_envelope(
    namespace: str,
    action_name: str,
    fields: Sequence[FieldDescriptor],
) -> str:
    """Render an envelope with the shared default EnvelopeBuilder."""
    return _default_builder().build(namespace, action_name, fields)

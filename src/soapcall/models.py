# soapcall/models.py
"""
Pydantic models for SOAP action requests and their HTTP exchange.

All models are frozen: an ActionRequest is built once per invocation,
rendered into an envelope and then discarded, and the HTTP descriptors are
passed to transports that must not modify them.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Characters that may never appear in an element name we emit verbatim
_FORBIDDEN_TAG_CHARACTERS: frozenset[str] = frozenset('<>&"\'/= \t\r\n')


class FieldDescriptor(BaseModel):
    """
    A single child element of the action element.

    Attributes:
        tag_name: The XML element name used inside the action element.
        raw_value: Unescaped element text. Escaping happens once, when the
                   envelope is rendered.
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str = Field(..., min_length=1)
    raw_value: str = ''

    @field_validator('tag_name')
    @classmethod
    def tag_name_is_plain(cls, v: str) -> str:
        """Reject tag names containing XML-reserved characters or whitespace."""
        bad_characters: set[str] = set(v) & _FORBIDDEN_TAG_CHARACTERS
        if bad_characters:
            raise ValueError(
                f'Tag name {v!r} contains reserved characters: {sorted(bad_characters)}'
            )
        return v


class ActionRequest(BaseModel):
    """
    Everything needed to render one SOAP request envelope.

    Attributes:
        namespace: The service type URI bound to the action element's prefix.
        action_name: The name of the remote action.
        fields: The action arguments in the order they are sent.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    action_name: str = Field(..., min_length=1)
    fields: tuple[FieldDescriptor, ...] = ()

    @property
    def soap_action(self) -> str:
        """Value of the SOAPAction HTTP header, quotes included."""
        return f'"{self.namespace}#{self.action_name}"'


class HttpRequest(BaseModel):
    """A fully formed HTTP request handed to a transport."""

    model_config = ConfigDict(frozen=True)

    method: str = 'POST'
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b''


class HttpResponse(BaseModel):
    """The raw HTTP response returned by a transport."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b''

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300  # noqa: PLR2004

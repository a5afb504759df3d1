"""Tests for SOAP envelope rendering."""

from pathlib import Path

import pytest
from conftest import SOAP_PREFIX, SOAP_SUFFIX

from soapcall.envelope import EnvelopeBuilder, build_envelope
from soapcall.models import ActionRequest, FieldDescriptor


@pytest.fixture
def builder() -> EnvelopeBuilder:
    """Create an EnvelopeBuilder using the packaged template."""
    return EnvelopeBuilder()


class TestEnvelopeBuilder:
    """Tests for EnvelopeBuilder.build method."""

    def test_reference_envelope(self, builder: EnvelopeBuilder) -> None:
        """Test the envelope matches the expected bytes exactly."""
        fields = [
            FieldDescriptor(tag_name='Foo', raw_value='foo'),
            FieldDescriptor(tag_name='bar', raw_value='bar'),
            FieldDescriptor(tag_name='Baz', raw_value='quoted="baz"'),
        ]

        body: str = builder.build('mynamespace', 'myaction', fields)

        assert body == (
            SOAP_PREFIX
            + '<u:myaction xmlns:u="mynamespace">'
            + '<Foo>foo</Foo>'
            + '<bar>bar</bar>'
            + '<Baz>quoted="baz"</Baz>'
            + '</u:myaction>'
            + SOAP_SUFFIX
        )

    def test_no_fields(self, builder: EnvelopeBuilder) -> None:
        """Test an action without arguments renders an empty action element."""
        body: str = builder.build('urn:x', 'GetStatus', [])
        assert body == SOAP_PREFIX + '<u:GetStatus xmlns:u="urn:x"></u:GetStatus>' + SOAP_SUFFIX

    def test_values_are_escaped_once(self, builder: EnvelopeBuilder) -> None:
        """Test element text escapes <, > and & but not quotes."""
        fields = [FieldDescriptor(tag_name='Q', raw_value='<a href="x">&amp;</a>')]

        body: str = builder.build('ns', 'act', fields)

        assert '<Q>&lt;a href="x"&gt;&amp;amp;&lt;/a&gt;</Q>' in body

    def test_namespace_and_action_are_verbatim(self, builder: EnvelopeBuilder) -> None:
        """Test the namespace URI is inserted without any escaping."""
        body: str = builder.build('urn:schemas-upnp-org:service:AVTransport:1', 'Play', [])
        assert '<u:Play xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">' in body

    def test_no_trailing_newline(self, builder: EnvelopeBuilder) -> None:
        """Test the body ends right after the closing Envelope tag."""
        body: str = builder.build('ns', 'act', [])
        assert body.endswith('</s:Envelope>')
        assert body.count('\n') == 1

    def test_deterministic(self, builder: EnvelopeBuilder) -> None:
        """Test identical inputs give identical output across builders."""
        fields = [FieldDescriptor(tag_name='A', raw_value='1')]
        assert builder.build('ns', 'act', fields) == EnvelopeBuilder().build('ns', 'act', fields)

    def test_build_request(self, builder: EnvelopeBuilder) -> None:
        """Test build_request renders an ActionRequest the same as build."""
        fields = (FieldDescriptor(tag_name='A', raw_value='1'),)
        request = ActionRequest(namespace='ns', action_name='act', fields=fields)

        assert builder.build_request(request) == builder.build('ns', 'act', fields)

    def test_missing_templates_dir_raises_error(self, tmp_path: Path) -> None:
        """Test a missing templates directory fails at construction."""
        with pytest.raises(FileNotFoundError, match='Templates directory not found'):
            EnvelopeBuilder(tmp_path / 'missing')

    def test_custom_templates_dir(self, tmp_path: Path) -> None:
        """Test a custom envelope template is used when given."""
        (tmp_path / 'envelope.xml').write_text('<{{ action_name }}/>')

        assert EnvelopeBuilder(tmp_path).build('ns', 'act', []) == '<act/>'


def test_build_envelope_matches_builder() -> None:
    """Test the module-level helper renders like a fresh builder."""
    fields = [FieldDescriptor(tag_name='A', raw_value='x&y')]
    assert build_envelope('ns', 'act', fields) == EnvelopeBuilder().build('ns', 'act', fields)

# soapcall/utils/xml_text.py
"""
Text escaping for XML element content.
"""

from xml.sax.saxutils import escape


def escape_xml_text(text: str) -> str:
    """
    Escape the characters that are reserved inside XML element text.

    Only '&', '<' and '>' are replaced. Quotes are left alone because they
    carry no meaning in element content, and the envelope must stay
    byte-identical to what remote devices expect.

    Escaping is not idempotent: an already escaped '&amp;' becomes
    '&amp;amp;'. Escape exactly once, when the envelope is rendered.

    Args:
        text: Raw, unescaped text.

    Returns:
        The text with reserved characters replaced by entity references.

    Example:
        >>> escape_xml_text('<foo>&')
        '&lt;foo&gt;&amp;'
        >>> escape_xml_text('"foo\\'')
        '"foo\\''
    """
    return escape(text)

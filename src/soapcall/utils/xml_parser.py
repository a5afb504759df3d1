# soapcall/utils/xml_parser.py
"""
XML parsing utilities for SOAP responses.

Elements are matched by local name only. Responders are free to pick any
prefix for the envelope and the action response (and some bind the response
element to a different URI than the request used), so qualified-name
comparison would reject responses that are semantically correct.
"""

from lxml import etree

from soapcall.exceptions import MalformedXMLError, RemoteFaultError, UnexpectedStructureError


def _safe_parser(encoding: str | None = None) -> etree.XMLParser:
    # Responses come from remote parties; never resolve entities or fetch DTDs.
    # A fresh parser per call keeps concurrent decodes independent.
    # An explicit encoding overrides whatever the XML declaration names.
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def local_name(element: etree._Element) -> str:
    """
    Return an element's name with any namespace stripped.

    Example:
        >>> local_name(etree.fromstring('<u:Foo xmlns:u="urn:x"/>'))
        'Foo'
    """
    return etree.QName(element).localname


def child_elements(element: etree._Element) -> list[etree._Element]:
    """Return the direct element children, skipping comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def find_child(element: etree._Element, name: str) -> etree._Element | None:
    """Return the first direct child whose local name equals name, or None."""
    for child in child_elements(element):
        if local_name(child) == name:
            return child
    return None


def element_text(element: etree._Element) -> str:
    """
    Return the text content of a leaf element.

    Whitespace is kept as the parser delivered it. Missing text (an empty
    element) yields an empty string.
    """
    return ''.join(element.itertext())


def parse_soap_response(xml_body: bytes | str) -> etree._Element:
    """
    Parse a SOAP XML response into an lxml Element.

    Args:
        xml_body: The raw response body. Bytes are preferred so the XML
                  declaration's encoding is honoured. A str is already
                  decoded text, so any declared encoding is ignored.

    Returns:
        The root element of the parsed XML tree.

    Raises:
        MalformedXMLError: If the body is not well-formed XML.
    """
    parser: etree.XMLParser
    if isinstance(xml_body, str):
        xml_body = xml_body.encode('utf-8')
        parser = _safe_parser(encoding='utf-8')
    else:
        parser = _safe_parser()

    try:
        return etree.fromstring(xml_body, parser=parser)
    except etree.XMLSyntaxError as e:
        raise MalformedXMLError(f'Response body is not well-formed XML: {e}') from e


def extract_soap_body(root: etree._Element) -> etree._Element:
    """
    Extract the Body element from a SOAP envelope.

    Args:
        root: The root element of the parsed response.

    Returns:
        The Body element containing the response payload.

    Raises:
        UnexpectedStructureError: If the root is not an Envelope or it has
                                  no Body child.
    """
    if local_name(root) != 'Envelope':
        raise UnexpectedStructureError(
            f'Expected an Envelope root element, got {local_name(root)!r}'
        )

    body: etree._Element | None = find_child(root, 'Body')

    if body is None:
        raise UnexpectedStructureError('No SOAP Body element found in response')

    return body


def check_for_soap_fault(body: etree._Element) -> None:
    """
    Raise if the SOAP Body carries a Fault element.

    Args:
        body: The Body element of the response envelope.

    Raises:
        RemoteFaultError: If a Fault is present. The fault code and string
                          default to 'Unknown' and 'Unknown error' when the
                          responder omits them.
    """
    fault: etree._Element | None = find_child(body, 'Fault')

    if fault is None:
        return

    fault_code_element: etree._Element | None = find_child(fault, 'faultcode')
    fault_string_element: etree._Element | None = find_child(fault, 'faultstring')
    detail_element: etree._Element | None = find_child(fault, 'detail')

    fault_code: str = (
        element_text(fault_code_element).strip() if fault_code_element is not None else ''
    )
    fault_string: str = (
        element_text(fault_string_element).strip()
        if fault_string_element is not None
        else ''
    )
    detail: str | None = None
    if detail_element is not None:
        detail = etree.tostring(detail_element, encoding='unicode', with_tail=False)

    raise RemoteFaultError(
        fault_code or 'Unknown',
        fault_string or 'Unknown error',
        detail,
    )

# soapcall/decoder.py
"""
Decoding of SOAP action responses into caller-owned output values.

The decoder walks Envelope -> Body -> {action}Response by local name and
copies each child element's text into the output field with the same name.
Output fields are assigned one at a time in document order; if an
assignment fails part way (e.g. a validating pydantic model rejects a value),
fields assigned before it keep their new values.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from lxml import etree

from soapcall.exceptions import UnexpectedStructureError, UnsupportedInputKindError
from soapcall.utils import (
    check_for_soap_fault,
    child_elements,
    element_text,
    extract_soap_body,
    find_child,
    is_frozen_record,
    is_record,
    local_name,
    parse_soap_response,
    record_tags,
)

logger: logging.Logger = logging.getLogger(__name__)


def output_slots(output: Any) -> dict[str, str]:
    """
    Map each expected response element name to the output slot it fills.

    For records the slot is the attribute name and the element name is the
    field's tag (override or declared name). For mutable mappings, the keys
    already present are both.

    Args:
        output: A pydantic model instance, a dataclass instance, or a
                MutableMapping with str keys.

    Returns:
        Dictionary mapping element local name to attribute or key name.

    Raises:
        UnsupportedInputKindError: If the output cannot receive named fields,
                                   including frozen records.
    """
    if is_record(output):
        if is_frozen_record(output):
            raise UnsupportedInputKindError(
                f'Output {type(output).__name__!r} is frozen and cannot receive '
                'decoded fields'
            )
        return {tag_name: attribute_name for attribute_name, tag_name in record_tags(output)}

    if isinstance(output, MutableMapping):
        return {key: key for key in output if isinstance(key, str)}

    raise UnsupportedInputKindError(
        f'Output must be a pydantic model, a dataclass instance or a mutable '
        f'mapping, got {type(output).__name__!r}'
    )


def _assign(output: Any, slot: str, value: str) -> None:
    if isinstance(output, MutableMapping):
        output[slot] = value
    else:
        setattr(output, slot, value)


def find_action_response(body: etree._Element, action_name: str) -> etree._Element:
    """
    Locate the {action_name}Response element inside a SOAP Body.

    Raises:
        UnexpectedStructureError: If no child of Body has that local name.
    """
    response_name: str = f'{action_name}Response'
    response_element: etree._Element | None = find_child(body, response_name)

    if response_element is None:
        found: list[str] = [local_name(child) for child in child_elements(body)]
        raise UnexpectedStructureError(
            f'No {response_name!r} element in SOAP Body (found: {found})'
        )

    return response_element


def decode_response(raw_body: bytes | str, action_name: str, output: Any) -> None:
    """
    Parse a SOAP response and copy its output arguments into output.

    Response elements without a matching output field are ignored; output
    fields without a matching element are left untouched. Matching is exact
    and case-sensitive on the element's local name.

    Args:
        raw_body: The HTTP response body.
        action_name: The action that was invoked (without 'Response').
        output: The value receiving decoded fields. See output_slots().

    Raises:
        MalformedXMLError: If the body is not well-formed XML.
        UnexpectedStructureError: If the Envelope/Body/response nesting is missing.
        RemoteFaultError: If the Body carries a SOAP Fault.
        UnsupportedInputKindError: If output cannot receive named fields.
    """
    slots: dict[str, str] = output_slots(output)

    root: etree._Element = parse_soap_response(raw_body)
    body: etree._Element = extract_soap_body(root)
    check_for_soap_fault(body)
    response_element: etree._Element = find_action_response(body, action_name)

    assigned: int = 0
    for child in child_elements(response_element):
        name: str = local_name(child)
        slot: str | None = slots.get(name)

        if slot is None:
            logger.debug('Ignoring unexpected response element %r', name)
            continue

        _assign(output, slot, element_text(child))
        assigned += 1

    logger.debug(
        'Decoded %d of %d expected field(s) from %rResponse',
        assigned,
        len(slots),
        action_name,
    )

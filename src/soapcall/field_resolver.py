# soapcall/field_resolver.py
"""
Conversion of caller-supplied input values into ordered SOAP fields.

Two input kinds are accepted:
- Records: pydantic model or dataclass instances. Fields are emitted in
  declaration order, under their tag override when one is attached.
- Mappings: any Mapping with str keys. Fields are emitted in the mapping's
  own iteration order, which for dict and OrderedDict is insertion order.

Values must be flat scalars; anything nested fails fast rather than being
silently dropped from the request.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from soapcall.exceptions import UnsupportedFieldValueError, UnsupportedInputKindError
from soapcall.models import ActionRequest, FieldDescriptor
from soapcall.utils import format_for_soap, is_record, record_tags

logger: logging.Logger = logging.getLogger(__name__)


def format_field_value(field_name: str, value: Any) -> str:
    """
    Render a scalar field value as element text.

    Args:
        field_name: The field's name, used in the error message.
        value: The value to render.

    Returns:
        The unescaped text form of the value.

    Raises:
        UnsupportedFieldValueError: If the value is not a supported scalar.
    """
    if value is None:
        return ''

    if isinstance(value, str):
        return value

    # bool is a subclass of int, so it must be checked before the numeric types
    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, int | float | Decimal):
        return str(value)

    if isinstance(value, date | datetime | time):
        return format_for_soap(value)

    raise UnsupportedFieldValueError(field_name, value)


def _iter_record(record: Any) -> Iterable[tuple[str, Any]]:
    for attribute_name, tag_name in record_tags(record):
        yield tag_name, getattr(record, attribute_name)


def _iter_mapping(mapping: Mapping[Any, Any]) -> Iterable[tuple[str, Any]]:
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise UnsupportedInputKindError(
                f'Mapping input must have str keys, got key {key!r} '
                f'of type {type(key).__name__!r}'
            )
        yield key, value


def resolve_fields(input_value: Any) -> tuple[FieldDescriptor, ...]:
    """
    Produce the ordered (tag, raw value) pairs for an input value.

    Args:
        input_value: A pydantic model instance, a dataclass instance, or a
                     str-keyed Mapping.

    Returns:
        The fields in send order. Values are raw; they are escaped when the
        envelope is built.

    Raises:
        UnsupportedInputKindError: If the input is neither a record nor a
                                   str-keyed mapping.
        UnsupportedFieldValueError: If a field holds a non-scalar value.

    Example:
        >>> resolve_fields({'NewEnable': True, 'NewPort': 8080})
        (FieldDescriptor(tag_name='NewEnable', raw_value='true'),
         FieldDescriptor(tag_name='NewPort', raw_value='8080'))
    """
    pairs: Iterable[tuple[str, Any]]
    if is_record(input_value):
        pairs = _iter_record(input_value)
    elif isinstance(input_value, Mapping):
        pairs = _iter_mapping(input_value)
    else:
        raise UnsupportedInputKindError(
            f'Input must be a pydantic model, a dataclass instance or a str-keyed '
            f'mapping, got {type(input_value).__name__!r}'
        )

    fields: tuple[FieldDescriptor, ...] = tuple(
        FieldDescriptor(tag_name=tag_name, raw_value=format_field_value(tag_name, value))
        for tag_name, value in pairs
    )
    logger.debug('Resolved %d field(s) from %s input', len(fields), type(input_value).__name__)
    return fields


def build_action_request(namespace: str, action_name: str, input_value: Any) -> ActionRequest:
    """Resolve an input value into a complete, immutable ActionRequest."""
    return ActionRequest(
        namespace=namespace,
        action_name=action_name,
        fields=resolve_fields(input_value),
    )

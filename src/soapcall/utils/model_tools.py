# soapcall/utils/model_tools.py
"""
Introspection helpers for record-like values.

This module turns pydantic models and dataclasses into an explicit, ordered
list of (attribute name, XML tag) pairs. Both the request side (reading
fields to send) and the response side (writing decoded values back) use the
same list, so a tag override applies symmetrically.
"""

import dataclasses
import logging
from typing import Any

from pydantic import BaseModel

logger: logging.Logger = logging.getLogger(__name__)

# Key used in dataclasses.field(metadata=...) to override the XML tag name
TAG_METADATA_KEY: str = 'soap'


def soap_tag(tag: str) -> dict[str, str]:
    """
    Build the dataclass field metadata that overrides a field's XML tag.

    Example:
        >>> @dataclass
        ... class Args:
        ...     new_target: str = field(default='', metadata=soap_tag('NewTargetValue'))
    """
    return {TAG_METADATA_KEY: tag}


def is_record(value: Any) -> bool:
    """
    Check whether a value is a record instance (pydantic model or dataclass).

    Classes themselves are not records; only their instances are.
    """
    if isinstance(value, type):
        return False
    return isinstance(value, BaseModel) or dataclasses.is_dataclass(value)


def is_frozen_record(record: Any) -> bool:
    """
    Check whether a record instance rejects attribute assignment.

    Covers dataclass(frozen=True) and pydantic models configured with
    frozen=True.
    """
    if isinstance(record, BaseModel):
        return bool(type(record).model_config.get('frozen', False))

    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return bool(type(record).__dataclass_params__.frozen)  # pyright: ignore[reportAttributeAccessIssue]

    return False


def record_tags(record: Any) -> list[tuple[str, str]]:
    """
    List a record's fields as (attribute name, XML tag) pairs in declaration order.

    Tag resolution:
    - pydantic models: the field's serialization_alias, else its alias, else
      the attribute name.
    - dataclasses: metadata[TAG_METADATA_KEY], else the attribute name.

    Args:
        record: A pydantic model instance or a dataclass instance.

    Returns:
        Ordered list of (attribute_name, tag_name) tuples.

    Raises:
        TypeError: If the value is not a record instance.
    """
    if isinstance(record, BaseModel):
        # model_fields preserves class declaration order, including inherited
        # fields ahead of the subclass's own
        return [
            (name, field_info.serialization_alias or field_info.alias or name)
            for name, field_info in type(record).model_fields.items()
        ]

    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [
            (field.name, field.metadata.get(TAG_METADATA_KEY, field.name))
            for field in dataclasses.fields(record)
        ]

    raise TypeError(f'Expected a pydantic model or dataclass instance, got {type(record)!r}')

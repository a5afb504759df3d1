# soapcall/utils/datetime_utils.py
"""
Datetime utilities for SOAP request fields.

Provides the lexical forms used for XML Schema date, time and dateTime values.
"""

from datetime import date, datetime, time


def format_for_soap(value: date | datetime | time) -> str:
    """
    Format a date, time or datetime object as ISO 8601 text.

    The output follows the XML Schema lexical forms:
    - date: YYYY-MM-DD
    - time: hh:mm:ss[.ffffff][+hh:mm]
    - dateTime: YYYY-MM-DDThh:mm:ss[.ffffff][+hh:mm]

    Naive values are sent without a timezone designator. No timezone is
    assumed on the caller's behalf, since many SOAP services (UPnP devices in
    particular) interpret unqualified times as local device time.

    Args:
        value: A date, time or datetime object.

    Returns:
        ISO 8601 formatted string.

    Examples:
        >>> format_for_soap(date(2025, 11, 14))
        '2025-11-14'
        >>> format_for_soap(datetime(2025, 11, 14, 15, 30, 45))
        '2025-11-14T15:30:45'
        >>> format_for_soap(time(8, 5))
        '08:05:00'
    """
    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        return value.isoformat(timespec='auto')

    if isinstance(value, date):
        return value.isoformat()

    return value.isoformat(timespec='auto')

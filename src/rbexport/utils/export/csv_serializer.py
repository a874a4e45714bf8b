"""
CSV serialization of link records.

Rows are built by hand rather than through the csv module so that quoting
is applied only when a value contains a comma, quote, CR or LF.
"""

import re
from typing import Any, Mapping

from rbexport.constants import CSV_FIELDNAMES
from rbexport.utils.url import extract_domain, extract_slashtag

_NEEDS_QUOTING = re.compile(r'[",\r\n]')


def csv_escape(value: Any) -> str:
    """Escape one CSV field; None becomes an empty field"""
    if value is None:
        return ""
    text = str(value)
    if _NEEDS_QUOTING.search(text):
        return '"' + text.replace('"', '""') + '"'
    return text


def _field_value(record: Mapping[str, Any], field: str) -> Any:
    if field == "domain":
        return extract_domain(record.get("shortUrl"))
    if field == "slashtag":
        return extract_slashtag(record.get("shortUrl"))
    return record.get(field)


def to_row(record: Any, fields=CSV_FIELDNAMES) -> str:
    """
    Serialize a link record to one CSV row without a trailing newline.

    ``domain`` and ``slashtag`` are derived from ``shortUrl``. Missing
    fields, or a record that is not a mapping, yield empty columns.
    """
    if not isinstance(record, Mapping):
        record = {}
    return ",".join(csv_escape(_field_value(record, field)) for field in fields)


def header_row(fields=CSV_FIELDNAMES) -> str:
    return ",".join(fields)

"""Activation list text format.

One record per line::

    # comment
    ! also a comment
    pkg.exporters.PdfExporter=true
    pkg.exporters.HtmlExporter=false

Lines whose first non-blank character is ``#`` or ``!`` are comments and
blank lines are ignored.  The value is true iff it reads ``true``
(case-insensitive).  Record order is significant.

Classes
-------
- ActivationRecord  - one provider name with its enabled flag

Functions
---------
- parse_activation_list   - text -> records
- format_activation_list  - records -> text
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

_COMMENT_MARKERS = ("#", "!")
_SEPARATOR = "="


class ActivationRecord(BaseModel):
    """Persisted activation state of one provider.

    Parameters
    ----------
    name:
        Stable name of the provider implementation.
    enabled:
        Whether the provider should be registered when the list is loaded.
    """

    name: str = Field(min_length=1)
    enabled: bool = False

    model_config = {"frozen": True}

    def to_line(self) -> str:
        """Return the on-disk representation, without line terminator."""
        return f"{self.name}{_SEPARATOR}{str(self.enabled).lower()}"


def parse_activation_list(text: str) -> list[ActivationRecord]:
    """Parse an activation list document.

    Malformed lines (no ``=`` or an empty name) are logged and skipped.

    Parameters
    ----------
    text:
        Document contents.

    Returns
    -------
    list[ActivationRecord]
        Records in document order.  Duplicated names are kept as-is.
    """
    records: list[ActivationRecord] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_MARKERS):
            continue
        name, separator, value = stripped.partition(_SEPARATOR)
        name = name.strip()
        if not separator or not name:
            logger.warning("Skipping malformed activation line %d: %r", lineno, line)
            continue
        records.append(ActivationRecord(name=name, enabled=value.strip().lower() == "true"))
    return records


def format_activation_list(records: Iterable[ActivationRecord]) -> str:
    """Render records as an activation list document, one line each."""
    return "".join(f"{record.to_line()}\n" for record in records)

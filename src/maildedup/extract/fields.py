"""Field extraction from parsed email messages.

``MessageFields`` is the narrow view the identity deriver and the record
builder need: Message-ID, raw Date text, parsed date, Subject, header count
and header presence. Accessors for required fields raise
``FieldExtractionError``; the others never raise.
"""

import re
from datetime import datetime
from email.message import Message
from email.utils import parsedate_to_datetime

from maildedup.errors import FieldExtractionError

__all__ = ["MessageFields", "unfold_header"]

_BRACKETED_ID = re.compile(r"<\s*([^<>\s]+)\s*>")


def unfold_header(value: str) -> str:
    """Unfold a raw header value into a single stripped line.

    Parameters
    ----------
    value : str
        Raw header value, possibly folded over several lines.

    Returns
    -------
    str
        Unfolded value.
    """
    return " ".join(part.strip() for part in value.splitlines()).strip()


class MessageFields:
    """Read-only accessors over a parsed message.

    Parameters
    ----------
    message : Message
        Message parsed with ``email.policy.default``.
    """

    def __init__(self, message: Message) -> None:
        self._message = message

    def raw_header(self, name: str) -> str | None:
        """Return the unfolded raw text of the first ``name`` header, or None."""
        wanted = name.lower()
        for header_name, value in self._message.raw_items():
            if header_name.lower() == wanted:
                return unfold_header(str(value))
        return None

    def message_id(self) -> str:
        """Return the Message-ID without angle brackets.

        Falls back to the raw header text when the value has no bracketed
        id.

        Raises
        ------
        FieldExtractionError
            If the header is missing or empty.
        """
        raw = self.raw_header("Message-ID")
        if not raw:
            raise FieldExtractionError("Message-ID header is missing")
        match = _BRACKETED_ID.search(raw)
        if match is None:
            return raw
        return match.group(1)

    def date_header(self) -> str:
        """Return the raw Date header text.

        Raises
        ------
        FieldExtractionError
            If the header is missing or empty.
        """
        raw = self.raw_header("Date")
        if not raw:
            raise FieldExtractionError("Date header is missing")
        return raw

    def subject(self) -> str:
        """Return the decoded Subject, or an empty string if absent.

        Raises
        ------
        FieldExtractionError
            If the header is present but cannot be decoded.
        """
        try:
            value = self._message.get("Subject")
        except (LookupError, TypeError, ValueError) as e:
            raise FieldExtractionError(f"Subject header is unreadable: {e}") from e
        if value is None:
            return ""
        return str(value)

    def parsed_date(self) -> datetime | None:
        """Return the parsed Date header, or None if missing or invalid."""
        raw = self.raw_header("Date")
        if not raw:
            return None
        try:
            return parsedate_to_datetime(raw)
        except (TypeError, ValueError, IndexError, OverflowError):
            return None

    def header_count(self) -> int:
        """Return the number of header fields, counting repeats."""
        return len(self._message)

    def has_header(self, name: str) -> bool:
        """Return whether a header is present (case-insensitive)."""
        return name in self._message

"""Identity key derivation.

A clean key hashes ``"{message_id}-{date}-{subject}"`` where ``date`` is the
raw Date header text. When any of those fields cannot be read, the key
falls back to a dirty hash of ``"{parsed_date}-${subject}"``. The ``$`` in
the dirty format is part of the hashed text; changing it changes which
dirty keys collide.
"""

from maildedup.errors import FieldExtractionError
from maildedup.extract.fields import MessageFields
from maildedup.models import IdentityKey
from maildedup.utils import sha256_digest

__all__ = [
    "clean_identity_text",
    "dirty_identity_text",
    "derive_identity_key",
]


def clean_identity_text(fields: MessageFields) -> str:
    """Build the text hashed into a clean key.

    Raises
    ------
    FieldExtractionError
        If Message-ID, Date or Subject cannot be read.
    """
    message_id = fields.message_id()
    date = fields.date_header()
    subject = fields.subject()
    return f"{message_id}-{date}-{subject}"


def dirty_identity_text(fields: MessageFields) -> str:
    """Build the text hashed into a dirty key. Never raises."""
    parsed = fields.parsed_date()
    date = parsed.isoformat() if parsed is not None else ""
    try:
        subject = fields.subject()
    except FieldExtractionError:
        subject = ""
    return f"{date}-${subject}"


def derive_identity_key(fields: MessageFields) -> IdentityKey:
    """Derive the identity key of a message.

    Parameters
    ----------
    fields : MessageFields
        Extracted message fields.

    Returns
    -------
    IdentityKey
        Clean key when Message-ID, Date and Subject are readable, dirty key
        otherwise.
    """
    try:
        text = clean_identity_text(fields)
    except FieldExtractionError:
        return IdentityKey.dirty(sha256_digest(dirty_identity_text(fields)))
    return IdentityKey.clean(sha256_digest(text))

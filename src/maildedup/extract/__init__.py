"""Message field extraction and identity key derivation."""

from maildedup.extract.fields import MessageFields
from maildedup.extract.identity import derive_identity_key

__all__ = ["MessageFields", "derive_identity_key"]

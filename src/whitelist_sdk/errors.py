"""SDK error types."""

from __future__ import annotations


class WhitelistSDKError(RuntimeError):
    """Base SDK error."""


class IndexOutOfRangeError(WhitelistSDKError, IndexError):
    """Requested leaf index does not exist in the tree."""

    def __init__(self, index: object, leaf_count: int) -> None:
        super().__init__(f"leaf index {index!r} out of range for tree of {leaf_count} leaves")
        self.index = index
        self.leaf_count = leaf_count


class IdentifierNotFoundError(WhitelistSDKError, LookupError):
    """Identifier is not part of the whitelist snapshot."""


class SchemaValidationError(WhitelistSDKError):
    """Schema validation failed."""


class ProofFormatError(SchemaValidationError):
    """Encoded proof bytes are malformed."""


class SignatureError(WhitelistSDKError):
    """Signing key material is invalid."""

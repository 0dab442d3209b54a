"""
Custom exceptions for the graph mapping layer.

Exception naming follows the same rule as the rest of the package:
- Avoid shadowing Python builtins (TypeError, ValueError)
- Use descriptive names: TypeMismatchError, MalformedRecordError
"""

from __future__ import annotations


class GraphModelError(Exception):
    """Base exception for all graph mapping errors."""

    pass


class SchemaDefinitionError(GraphModelError, ValueError):
    """Raised when a schema declares a descriptor that cannot be resolved.

    Examples are an unknown type tag, an options record nested inside
    another options record, or contradictory options such as
    lowercase and uppercase together.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize with message and the offending property key.

        Args:
            message: Human-readable error description
            key: Property key whose descriptor is invalid, if known
        """
        super().__init__(message)
        self.key = key


class TypeMismatchError(GraphModelError, TypeError):
    """Raised when a value's runtime kind differs from its declared kind.

    Signals a programming error in the caller, so it is never retried.
    """

    def __init__(self, key: str, expected: str, actual: str) -> None:
        """Initialize with the property key and both display names.

        Args:
            key: Property key being checked
            expected: Display name of the declared type (e.g. "Number")
            actual: Display name of the value's runtime type (e.g. "String")
        """
        super().__init__(
            "Type mismatch: "
            f"expected {key} to be {expected} "
            f"but received {actual}."
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class SchemaValidationError(GraphModelError, ValueError):
    """Raised when a property bag violates a schema constraint.

    This covers missing required keys, undeclared keys, enum
    membership and pattern matches.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class MalformedRecordError(GraphModelError):
    """Raised when a result record's keys and fields are not aligned."""

    def __init__(self, key_count: int, field_count: int) -> None:
        """Initialize with both sequence lengths.

        Args:
            key_count: Number of entries in record.keys
            field_count: Number of entries in record.fields
        """
        super().__init__(
            f"Malformed record: {key_count} keys but {field_count} fields"
        )
        self.key_count = key_count
        self.field_count = field_count

"""Errors raised while decoding or encoding indirect identifiers.

Request-time errors subclass :class:`graphql.GraphQLError` so graphql-core reports
them in ``ExecutionResult.errors`` with a ``BAD_USER_INPUT`` code, keeping the
raised instance reachable as ``original_error``.
"""
from __future__ import annotations

from typing import Any, Optional

from graphql import GraphQLError

__all__ = [
    "IndirectError",
    "ScopeMissing",
    "UnknownScopeType",
    "TypeTagMismatch",
    "DecodeError",
    "IndirectConfigError",
]


class IndirectError(GraphQLError):
    """Base class for client-facing identifier errors."""

    code = "BAD_USER_INPUT"

    def __init__(self, message: str):
        super().__init__(message, extensions={"code": self.code})


class ScopeMissing(IndirectError):
    def __init__(self, position: str, key: str):
        self.position = position
        self.key = key
        super().__init__(f'"{position}" expects `context.{key}` to be set')


class UnknownScopeType(IndirectError):
    def __init__(self, position: str, scope_type: Any):
        self.position = position
        self.scope_type = scope_type
        super().__init__(f'"{position}" has an unknown scope type {scope_type!r}')


class TypeTagMismatch(IndirectError):
    def __init__(self, expected: str, actual: Any, position: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(f'Invalid value. Expected type "{expected}" but found "{actual}"')


class DecodeError(IndirectError):
    """Token is malformed, forged or bound to another scope."""


class IndirectConfigError(ValueError):
    """Invalid transformer configuration, raised while the schema is built."""

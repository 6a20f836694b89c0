"""idorql public API.

Exposes opaque, scope-bound identifiers in GraphQL schemas while resolvers keep
working with raw keys.

Exposes:
- IndirectDirectiveTransformer, directive_transformer (graphql-core schemas)
- IndirectConfig, INDIRECT_DIRECTIVE_SDL
- SignedIdCodec, IdentifierCodec, DecodedIdentifier
- error types (ScopeMissing, UnknownScopeType, TypeTagMismatch, DecodeError, ...)
- Lazy strawberry binding: Indirect, IndirectSchema (imported on first access)
"""
from __future__ import annotations

from .codec import DecodedIdentifier, IdentifierCodec, SignedIdCodec
from .config import DEFAULT_DIRECTIVE_NAME, INDIRECT_DIRECTIVE_SDL, IndirectConfig
from .errors import (
    DecodeError,
    IndirectConfigError,
    IndirectError,
    ScopeMissing,
    TypeTagMismatch,
    UnknownScopeType,
)
from .schema import IndirectDirectiveTransformer, directive_transformer


def __getattr__(name: str):  # PEP 562 lazy exports
    if name in {'Indirect', 'IndirectSchema'}:
        from . import directive as _directive
        return getattr(_directive, name)
    raise AttributeError(name)


__all__ = [
    'IndirectDirectiveTransformer', 'directive_transformer',
    'IndirectConfig', 'DEFAULT_DIRECTIVE_NAME', 'INDIRECT_DIRECTIVE_SDL',
    'SignedIdCodec', 'IdentifierCodec', 'DecodedIdentifier',
    'IndirectError', 'ScopeMissing', 'UnknownScopeType', 'TypeTagMismatch', 'DecodeError', 'IndirectConfigError',
    'Indirect', 'IndirectSchema',
]

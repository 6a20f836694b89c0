"""Schema transformer applying indirect identifier handling to every object field."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from graphql import GraphQLSchema, is_introspection_type, is_object_type

from .config import DEFAULT_DIRECTIVE_NAME, IndirectConfig
from .core.leaf import LeafTransformBuilder
from .core.lookup import DirectiveLookup
from .core.structural import StructuralTransformer
from .interception import FieldInterceptor
from .mapper import map_schema

_logger = logging.getLogger("idorql")

__all__ = ["IndirectDirectiveTransformer", "directive_transformer"]


class IndirectDirectiveTransformer:
    """Turn a schema annotated with ``@indirect`` into one exchanging opaque ids.

    Resolvers keep working with raw keys: directive-bearing arguments (at any depth
    of input objects and lists) are decoded before the resolver runs, and results
    of directive-bearing fields are encoded before they leave the resolver.

    Example:
        transformer = IndirectDirectiveTransformer(IndirectConfig(secret="s3cret"))
        schema = transformer(build_schema(type_defs))
    """

    def __init__(self, config: Optional[IndirectConfig] = None):
        self.config = config or IndirectConfig()
        self.codec = self.config.build_codec()
        self.scopes = self.config.build_scopes()

    def __call__(self, schema: GraphQLSchema) -> GraphQLSchema:
        return self.transform(schema)

    def interceptor(self, schema: GraphQLSchema) -> FieldInterceptor:
        lookup = DirectiveLookup(schema, self.config.directive_name)
        transformer = StructuralTransformer(lookup, LeafTransformBuilder(self.codec, self.scopes))
        return FieldInterceptor(transformer, self.scopes)

    def transform(self, schema: GraphQLSchema) -> GraphQLSchema:
        """Return a new schema with every object field wired for identifier handling.

        Raises:
            IndirectConfigError: the directive sits on a non-scalar position.
            UnknownScopeType: a directive names a scope with no strategy.
        """
        interceptor = self.interceptor(schema)
        overrides: Dict[Tuple[str, str], Dict[str, Any]] = {}
        visited = 0
        for type_ in schema.type_map.values():
            if is_introspection_type(type_) or not is_object_type(type_):
                continue
            for name, field in type_.fields.items():
                visited += 1
                field_overrides = interceptor.intercept(type_, name, field)
                if field_overrides:
                    overrides[(type_.name, name)] = field_overrides
        _logger.debug("idorql: %d of %d object fields wrapped for @%s", len(overrides), visited, self.config.directive_name)
        return map_schema(schema, overrides)


def directive_transformer(directive_name: str = DEFAULT_DIRECTIVE_NAME, **options: Any) -> IndirectDirectiveTransformer:
    """Shortcut: ``directive_transformer("indirect", secret="...")(schema)``."""
    return IndirectDirectiveTransformer(IndirectConfig(directive_name=directive_name, **options))

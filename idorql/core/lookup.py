"""Directive lookup over SDL-built and strawberry-built graphql-core schemas."""
from __future__ import annotations

from typing import Any, Optional, Union

from graphql import GraphQLArgument, GraphQLField, GraphQLInputField, GraphQLSchema
from graphql.execution.values import get_directive_values
from strawberry.schema.schema_converter import GraphQLCoreConverter

from .types import DEFAULT_SCOPE, DirectiveAnnotation

# strawberry keeps its own definitions on graphql-core extensions
DEFINITION_BACKREF = GraphQLCoreConverter.DEFINITION_BACKREF

Position = Union[GraphQLField, GraphQLArgument, GraphQLInputField]


def strawberry_directive_name(directive: Any) -> Optional[str]:
    meta = getattr(type(directive), "__strawberry_directive__", None)
    if meta is None:
        return None
    name = getattr(meta, "graphql_name", None) or getattr(meta, "python_name", None)
    if not name:
        return None
    return name[:1].lower() + name[1:]


class DirectiveLookup:
    """Return the :class:`DirectiveAnnotation` of a field, argument or input field.

    SDL schemas carry the directive on the position's ``ast_node``; its arguments
    are coerced against the schema's directive definition so definition defaults
    apply. Strawberry schemas carry schema directive instances on the strawberry
    definition referenced from the position's ``extensions``.
    """

    def __init__(self, schema: GraphQLSchema, directive_name: str):
        self.directive_name = directive_name
        self.directive = schema.get_directive(directive_name)

    def __call__(self, position: Position) -> Optional[DirectiveAnnotation]:
        return self._from_ast(position) or self._from_strawberry(position)

    def _from_ast(self, position: Position) -> Optional[DirectiveAnnotation]:
        node = getattr(position, "ast_node", None)
        if node is None or self.directive is None:
            return None
        values = get_directive_values(self.directive, node)
        if values is None:
            return None
        return DirectiveAnnotation(
            type_tag=values.get("type"),
            scope_type=values.get("scope") or DEFAULT_SCOPE,
        )

    def _from_strawberry(self, position: Position) -> Optional[DirectiveAnnotation]:
        definition = (getattr(position, "extensions", None) or {}).get(DEFINITION_BACKREF)
        for directive in getattr(definition, "directives", None) or ():
            if strawberry_directive_name(directive) == self.directive_name:
                return DirectiveAnnotation(
                    type_tag=getattr(directive, "type", None),
                    scope_type=getattr(directive, "scope", None) or DEFAULT_SCOPE,
                )
        return None

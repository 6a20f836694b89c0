"""Recursive transforms over arbitrarily nested input values.

Transformer maps for input objects are rebuilt on every call from the type's
current field list and recursion only follows keys present in the value, so a
self-referential input type terminates at the depth of the concrete value.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Set

from graphql import (
    GraphQLInputObjectType,
    GraphQLInputType,
    get_named_type,
    get_nullable_type,
    is_input_object_type,
    is_list_type,
    is_scalar_type,
)

from ..errors import IndirectConfigError, UnknownScopeType
from .leaf import LeafTransformBuilder
from .lookup import DirectiveLookup, Position
from .types import DirectiveAnnotation, Direction, Invocation, Transform


class StructuralTransformer:
    def __init__(self, lookup: DirectiveLookup, leaves: LeafTransformBuilder):
        self.lookup = lookup
        self.leaves = leaves

    def build(
        self,
        type_: Any,
        annotation: Optional[DirectiveAnnotation],
        position: str,
        direction: Direction = Direction.DECODE,
    ) -> Optional[Transform]:
        """Return the transform for a value of ``type_`` or ``None`` for identity.

        ``annotation`` is the directive found on the position holding the value.
        Scalars (and lists of scalars, at any nesting) with an annotation get a leaf
        transform; input objects and lists of input objects get a lazy structural
        transform whose nested maps are built when a value is processed.
        """
        type_ = get_nullable_type(type_)
        named = get_named_type(type_)
        if is_scalar_type(named):
            if annotation is None:
                return None
            return self.leaves.build(annotation, annotation.type_tag_for(named), position, direction)
        if is_list_type(type_):
            return self._list_transform(type_.of_type, annotation, position, direction)
        if is_input_object_type(type_):
            return self._object_transform(type_, direction)
        return None

    def _list_transform(self, element_type: Any, annotation, position: str, direction: Direction) -> Transform:
        def transform(value: Any, invocation: Invocation) -> Any:
            if value is None:
                return value
            element = self.build(element_type, annotation, position, direction)
            if element is None:
                return value
            return [element(item, invocation) if item is not None else item for item in value]

        return transform

    def _object_transform(self, input_type: GraphQLInputObjectType, direction: Direction) -> Transform:
        def transform(value: Any, invocation: Invocation) -> Any:
            if not isinstance(value, Mapping):
                return value
            transformers = self.field_transforms(input_type, direction)
            result = dict(value)
            for key, field_transform in transformers.items():
                item = value.get(key)
                if item is None:
                    continue
                result[key] = field_transform(item, invocation)
            return result

        return transform

    def field_transforms(self, input_type: GraphQLInputObjectType, direction: Direction = Direction.DECODE) -> Dict[str, Transform]:
        """Build a fresh transformer map for the fields of ``input_type``.

        Keys follow graphql-core's coercion (``out_name`` when set). Fields without
        anything to transform are left out of the map.
        """
        transformers: Dict[str, Transform] = {}
        for name, field in input_type.fields.items():
            transform = self.build(field.type, self.lookup(field), f"{input_type.name}.{name}", direction)
            if transform is not None:
                transformers[field.out_name or name] = transform
        return transformers

    def check_annotation(self, position: Position, position_name: str) -> Optional[DirectiveAnnotation]:
        """Look up and validate the directive of ``position`` at build time."""
        annotation = self.lookup(position)
        if annotation is None:
            return None
        if not is_scalar_type(get_named_type(position.type)):
            raise IndirectConfigError(
                f'"{position_name}" uses @{self.lookup.directive_name} on non-scalar type {position.type}'
            )
        if annotation.scope_type not in self.leaves.scopes:
            raise UnknownScopeType(position_name, annotation.scope_type)
        return annotation

    def contains_directive(self, type_: GraphQLInputType, _seen: Optional[Set[str]] = None) -> bool:
        """Whether any input field reachable from ``type_`` carries the directive.

        Every annotated input field reachable from ``type_`` is validated, so a
        misconfigured directive fails while the schema is built.
        """
        named = get_named_type(type_)
        if not is_input_object_type(named):
            return False
        seen = set() if _seen is None else _seen
        if named.name in seen:
            return False
        seen.add(named.name)
        found = False
        for name, field in named.fields.items():
            if self.check_annotation(field, f"{named.name}.{name}") is not None:
                found = True
            elif self.contains_directive(field.type, seen):
                found = True
        return found

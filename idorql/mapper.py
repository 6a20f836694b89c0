"""Rebuild a graphql-core schema with replaced field resolvers.

Object, interface and union types are re-created so every reference in the new
schema points at the new types; fields resolve lazily through thunks. Scalars,
enums, input objects, directives and introspection types are leaf-like with
respect to resolvers and are shared with the source schema, which is left
untouched.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from graphql import (
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_union_type,
)

FieldOverrides = Mapping[Tuple[str, str], Mapping[str, Any]]

__all__ = ["FieldOverrides", "map_schema"]


def map_schema(schema: GraphQLSchema, overrides: FieldOverrides) -> GraphQLSchema:
    """Return a copy of ``schema`` with ``GraphQLField`` kwargs overridden.

    Args:
        schema: Source schema; not modified.
        overrides: ``(type_name, field_name) -> {kwarg: value}`` applied to the
            fields of object types (typically ``resolve`` and ``subscribe``).
    """

    type_map: Dict[str, GraphQLNamedType] = {}

    def replace_type(type_: Any) -> Any:
        if is_list_type(type_):
            return GraphQLList(replace_type(type_.of_type))
        if is_non_null_type(type_):
            return GraphQLNonNull(replace_type(type_.of_type))
        return type_map[type_.name]

    def replace_maybe_type(type_: Any) -> Any:
        return type_ and type_map[type_.name]

    def map_fields(type_: Any) -> Dict[str, GraphQLField]:
        fields = {}
        for name, field in type_.fields.items():
            kwargs = {**field.to_kwargs(), "type_": replace_type(field.type)}
            kwargs.update(overrides.get((type_.name, name), {}))
            fields[name] = GraphQLField(**kwargs)
        return fields

    def map_named_type(type_: GraphQLNamedType) -> GraphQLNamedType:
        if is_introspection_type(type_):
            return type_
        if is_object_type(type_):
            return GraphQLObjectType(**{
                **type_.to_kwargs(),
                "fields": lambda: map_fields(type_),
                "interfaces": lambda: [type_map[i.name] for i in type_.interfaces],
            })
        if is_interface_type(type_):
            return GraphQLInterfaceType(**{
                **type_.to_kwargs(),
                "fields": lambda: map_fields(type_),
                "interfaces": lambda: [type_map[i.name] for i in type_.interfaces],
            })
        if is_union_type(type_):
            return GraphQLUnionType(**{
                **type_.to_kwargs(),
                "types": lambda: [type_map[t.name] for t in type_.types],
            })
        return type_

    for name, named_type in schema.type_map.items():
        type_map[name] = map_named_type(named_type)

    return GraphQLSchema(**{
        **schema.to_kwargs(),
        "query": replace_maybe_type(schema.query_type),
        "mutation": replace_maybe_type(schema.mutation_type),
        "subscription": replace_maybe_type(schema.subscription_type),
        "types": list(type_map.values()),
    })

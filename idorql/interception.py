"""Wrap field resolvers so arguments are decoded and results encoded."""
from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Dict, Optional

from graphql import GraphQLField, GraphQLObjectType, default_field_resolver

from .core.scopes import ScopeRegistry
from .core.structural import StructuralTransformer
from .core.types import Direction, Invocation, Transform

_logger = logging.getLogger("idorql")


class FieldInterceptor:
    """Compute resolver replacements for the fields of object types.

    Args:
        transformer: Structural transformer sharing the schema's directive lookup.
        scopes: Scope registry used by every invocation.
    """

    def __init__(self, transformer: StructuralTransformer, scopes: ScopeRegistry):
        self.transformer = transformer
        self.scopes = scopes

    def intercept(self, parent: GraphQLObjectType, name: str, field: GraphQLField) -> Dict[str, Any]:
        """Return ``resolve``/``subscribe`` overrides for ``parent.name``.

        An empty dict means the field is kept as declared.
        """
        position = f"{parent.name}.{name}"
        decoders = self.argument_decoders(position, field)
        encoder = self.result_encoder(position, field)
        overrides: Dict[str, Any] = {}
        if encoder is not None:
            overrides["resolve"] = self._wrap_resolve(field.resolve or default_field_resolver, decoders, encoder)
        elif decoders and field.resolve is not None:
            overrides["resolve"] = self._wrap_resolve(field.resolve, decoders, None)
        if decoders and field.subscribe is not None:
            overrides["subscribe"] = self._wrap_subscribe(field.subscribe, decoders)
        if overrides:
            _logger.debug(
                "idorql: wrapped %s (arguments=%s, encode=%s, subscribe=%s)",
                position, sorted(decoders), encoder is not None, "subscribe" in overrides,
            )
        return overrides

    def argument_decoders(self, position: str, field: GraphQLField) -> Dict[str, Transform]:
        """Decoders for the arguments of ``field`` whose shape carries the directive."""
        decoders: Dict[str, Transform] = {}
        for arg_name, argument in field.args.items():
            arg_position = f"{position}.{arg_name}"
            annotation = self.transformer.check_annotation(argument, arg_position)
            if annotation is None and not self.transformer.contains_directive(argument.type):
                continue
            decoder = self.transformer.build(argument.type, annotation, arg_position, Direction.DECODE)
            if decoder is not None:
                decoders[argument.out_name or arg_name] = decoder
        return decoders

    def result_encoder(self, position: str, field: GraphQLField) -> Optional[Transform]:
        annotation = self.transformer.check_annotation(field, position)
        if annotation is None:
            return None
        return self.transformer.build(field.type, annotation, position, Direction.ENCODE)

    def _decode_arguments(self, args: Dict[str, Any], decoders: Dict[str, Transform], invocation: Invocation) -> Dict[str, Any]:
        decoded = dict(args)
        for key, decoder in decoders.items():
            if key in args:
                decoded[key] = decoder(args[key], invocation)
        return decoded

    def _wrap_resolve(self, resolve: Callable[..., Any], decoders: Dict[str, Transform], encoder: Optional[Transform]):
        scopes = self.scopes

        @functools.wraps(resolve)
        def resolve_indirect(root: Any, info: Any, **args: Any) -> Any:
            invocation = Invocation(info.context, scopes)
            if decoders:
                args = self._decode_arguments(args, decoders, invocation)
            result = resolve(root, info, **args)
            if encoder is None:
                return result
            if inspect.isawaitable(result):
                return _encode_awaited(result, encoder, invocation)
            return encoder(result, invocation)

        return resolve_indirect

    def _wrap_subscribe(self, subscribe: Callable[..., Any], decoders: Dict[str, Transform]):
        scopes = self.scopes

        @functools.wraps(subscribe)
        def subscribe_indirect(root: Any, info: Any, **args: Any) -> Any:
            invocation = Invocation(info.context, scopes)
            return subscribe(root, info, **self._decode_arguments(args, decoders, invocation))

        return subscribe_indirect


async def _encode_awaited(result: Any, encoder: Transform, invocation: Invocation) -> Any:
    return encoder(await result, invocation)

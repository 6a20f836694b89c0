from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..codec import IdentifierCodec
from ..errors import TypeTagMismatch
from .scopes import ScopeRegistry
from .types import DirectiveAnnotation, Direction, Invocation, Transform


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


class LeafTransformBuilder:
    """Build decode/encode transforms for identifier-bearing scalar positions."""

    def __init__(self, codec: IdentifierCodec, scopes: ScopeRegistry):
        self.codec = codec
        self.scopes = scopes

    def build(self, annotation: DirectiveAnnotation, type_tag: str, position: str, direction: Direction) -> Transform:
        """Return ``transform(value, invocation)`` for one position.

        ``None`` values are returned untouched and never trigger scope resolution.
        Sequences are mapped element-wise (nested lists included) keeping order and
        length; ``None`` elements stay ``None``.
        """
        codec = self.codec

        def decode_one(token: Any, scope: Any) -> Any:
            decoded = codec.decode(token, scope)
            if decoded.type_tag != type_tag:
                raise TypeTagMismatch(type_tag, decoded.type_tag, position)
            return decoded.value

        def encode_one(value: Any, scope: Any) -> Any:
            return codec.encode(value, type_tag, scope)

        apply_one = decode_one if direction is Direction.DECODE else encode_one

        def apply(value: Any, scope: Any) -> Any:
            if value is None:
                return value
            if _is_sequence(value):
                return [apply(item, scope) for item in value]
            return apply_one(value, scope)

        def transform(value: Any, invocation: Invocation) -> Any:
            if value is None:
                return value
            return apply(value, invocation.scope(position, annotation))

        return transform

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from graphql import GraphQLType, get_named_type

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .scopes import ScopeRegistry

DEFAULT_SCOPE = "PUBLIC"


class Direction(Enum):
    DECODE = "decode"
    ENCODE = "encode"


@dataclass(frozen=True)
class DirectiveAnnotation:
    """Directive arguments attached to an identifier-bearing position.

    Attributes:
        type_tag: Logical identifier type checked on decode. ``None`` means the
            named type of the position (e.g. ``ID``).
        scope_type: Label of the scope strategy used to derive the scope key.
    """

    type_tag: Optional[str] = None
    scope_type: str = DEFAULT_SCOPE

    def type_tag_for(self, type_: GraphQLType) -> str:
        return self.type_tag or get_named_type(type_).name


class Invocation:
    """State of one field invocation: the request context and resolved scope keys.

    Created per resolver call and dropped with it, so concurrent resolutions never
    share scope keys.
    """

    __slots__ = ("context", "_registry", "_scopes")

    def __init__(self, context: Any, registry: "ScopeRegistry"):
        self.context = context
        self._registry = registry
        self._scopes: Dict[str, Any] = {}

    def scope(self, position: str, annotation: DirectiveAnnotation) -> Any:
        if position not in self._scopes:
            self._scopes[position] = self._registry.resolve(self.context, position, annotation)
        return self._scopes[position]


Transform = Callable[[Any, Invocation], Any]

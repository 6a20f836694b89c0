"""Scope strategies deriving the scope key a token is bound to."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Optional

from ..errors import ScopeMissing, UnknownScopeType
from .types import DirectiveAnnotation

ScopeResolver = Callable[[Any, str, DirectiveAnnotation], Any]

_MISSING = object()


def public_scope(context: Any, position: str, annotation: DirectiveAnnotation) -> Any:
    return None


class ContextScope:
    """Reads the scope key from the request context.

    Dict contexts are looked up by key, any other context object by attribute.
    A missing or ``None`` entry raises :class:`ScopeMissing`.
    """

    def __init__(self, key: str):
        self.key = key

    def __call__(self, context: Any, position: str, annotation: DirectiveAnnotation) -> Any:
        if isinstance(context, Mapping):
            value = context.get(self.key, _MISSING)
        else:
            value = getattr(context, self.key, _MISSING)
        if value is _MISSING or value is None:
            raise ScopeMissing(position, self.key)
        return value


class ScopeRegistry:
    """Registry of scope strategies keyed by the directive's ``scope`` label.

    Args:
        resolvers: Extra strategies ``label -> fn(context, position, annotation)``.
            They override the built-in ``PUBLIC`` and ``CONTEXT`` labels.
        context_key: Context entry read by the ``CONTEXT`` strategy.
    """

    def __init__(self, resolvers: Optional[Mapping[str, ScopeResolver]] = None, *, context_key: str = "indirect"):
        self._resolvers: Dict[str, ScopeResolver] = {
            "PUBLIC": public_scope,
            "CONTEXT": ContextScope(context_key),
        }
        self._resolvers.update(resolvers or {})

    def __contains__(self, label: object) -> bool:
        return label in self._resolvers

    @property
    def labels(self) -> Iterable[str]:
        return tuple(self._resolvers)

    def resolve(self, context: Any, position: str, annotation: DirectiveAnnotation) -> Any:
        resolver = self._resolvers.get(annotation.scope_type)
        if resolver is None:
            raise UnknownScopeType(position, annotation.scope_type)
        return resolver(context, position, annotation)

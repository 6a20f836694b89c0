"""Strawberry binding: the ``@indirect`` schema directive and a schema applying it."""
from __future__ import annotations

from typing import Any, Optional

import strawberry
from strawberry.schema_directive import Location

from .config import IndirectConfig
from .core.types import DEFAULT_SCOPE
from .schema import IndirectDirectiveTransformer

__all__ = ["Indirect", "IndirectSchema"]


@strawberry.schema_directive(
    locations=[Location.FIELD_DEFINITION, Location.ARGUMENT_DEFINITION, Location.INPUT_FIELD_DEFINITION],
    name="indirect",
    description="Exposes the raw key held by this position as an opaque identifier.",
)
class Indirect:
    type: Optional[str] = None
    scope: str = DEFAULT_SCOPE


class IndirectSchema(strawberry.Schema):
    """``strawberry.Schema`` whose resolvers exchange opaque identifiers.

    Usage:

        @strawberry.type
        class Query:
            @strawberry.field(directives=[Indirect(type="User")])
            def viewer_id(self) -> strawberry.ID: ...

        schema = IndirectSchema(query=Query, indirect=IndirectConfig(secret="s3cret"))

    The strawberry schema is built first; the underlying graphql-core schema is then
    replaced by its transformed copy so ``execute`` and ``subscribe`` go through it.
    """

    def __init__(self, *args: Any, indirect: Optional[IndirectConfig] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.indirect = IndirectDirectiveTransformer(indirect)
        transformed = self.indirect(self._schema)
        # strawberry's Info reaches back to the strawberry schema through this attribute
        transformed._strawberry_schema = self  # type: ignore[attr-defined]
        self._schema = transformed

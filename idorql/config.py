from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from .codec import IdentifierCodec, SignedIdCodec
from .core.scopes import ScopeRegistry, ScopeResolver
from .errors import IndirectConfigError

DEFAULT_DIRECTIVE_NAME = "indirect"

INDIRECT_DIRECTIVE_SDL = """
directive @indirect(
  type: String
  scope: String = "PUBLIC"
  raw: Boolean = false
) on ARGUMENT_DEFINITION | FIELD_DEFINITION | INPUT_FIELD_DEFINITION
"""


@dataclass
class IndirectConfig:
    """Build-time options of the indirect identifier transformer.

    Attributes:
        directive_name: Name of the directive marking identifier positions.
        secret: Signing secret of the default :class:`SignedIdCodec`.
        codec: Custom codec; takes precedence over ``secret``.
        scope_resolvers: Extra scope strategies merged over ``PUBLIC``/``CONTEXT``.
        context_key: Context entry read by ``CONTEXT``; defaults to ``directive_name``.
    """

    directive_name: str = DEFAULT_DIRECTIVE_NAME
    secret: Optional[Union[str, bytes]] = None
    codec: Optional[IdentifierCodec] = None
    scope_resolvers: Mapping[str, ScopeResolver] = field(default_factory=dict)
    context_key: Optional[str] = None

    def build_codec(self) -> IdentifierCodec:
        if self.codec is not None:
            return self.codec
        if not self.secret:
            raise IndirectConfigError("IndirectConfig requires either a codec or a secret")
        return SignedIdCodec(self.secret)

    def build_scopes(self) -> ScopeRegistry:
        return ScopeRegistry(self.scope_resolvers, context_key=self.context_key or self.directive_name)

# Core subpackage: transform engine shared by the schema walker and the strawberry binding.
from .types import DEFAULT_SCOPE, DirectiveAnnotation, Direction, Invocation, Transform
from .scopes import ContextScope, ScopeRegistry, ScopeResolver, public_scope
from .lookup import DirectiveLookup
from .leaf import LeafTransformBuilder
from .structural import StructuralTransformer

__all__ = [
    'DEFAULT_SCOPE', 'DirectiveAnnotation', 'Direction', 'Invocation', 'Transform',
    'ContextScope', 'ScopeRegistry', 'ScopeResolver', 'public_scope',
    'DirectiveLookup', 'LeafTransformBuilder', 'StructuralTransformer',
]

import pytest

from idorql import ScopeMissing, UnknownScopeType
from idorql.core import ContextScope, DirectiveAnnotation, Invocation, ScopeRegistry


def test_public_scope_is_unscoped():
    registry = ScopeRegistry()
    assert registry.resolve({}, "Query.user.id", DirectiveAnnotation("User")) is None


def test_context_scope_reads_configured_key():
    registry = ScopeRegistry(context_key="tenant")
    annotation = DirectiveAnnotation("User", "CONTEXT")
    assert registry.resolve({"tenant": "acme"}, "Query.user.id", annotation) == "acme"


def test_context_scope_reads_attributes_of_object_contexts():
    class Context:
        tenant = "acme"

    assert ContextScope("tenant")(Context(), "Query.user.id", DirectiveAnnotation()) == "acme"


@pytest.mark.parametrize("context", [{}, {"tenant": None}, object()])
def test_context_scope_missing(context):
    registry = ScopeRegistry(context_key="tenant")
    with pytest.raises(ScopeMissing) as exc:
        registry.resolve(context, "Query.user.id", DirectiveAnnotation("User", "CONTEXT"))
    assert exc.value.position == "Query.user.id"
    assert "context.tenant" in exc.value.message


def test_context_scope_accepts_falsy_values():
    registry = ScopeRegistry(context_key="tenant")
    assert registry.resolve({"tenant": 0}, "Query.user.id", DirectiveAnnotation(scope_type="CONTEXT")) == 0


def test_unknown_scope_type():
    registry = ScopeRegistry()
    with pytest.raises(UnknownScopeType) as exc:
        registry.resolve({}, "Query.user.id", DirectiveAnnotation("User", "TEAM"))
    assert exc.value.position == "Query.user.id"
    assert "TEAM" not in registry


def test_custom_resolvers_extend_and_override_builtins():
    registry = ScopeRegistry({
        "TEAM": lambda context, position, annotation: f"team:{context['team']}",
        "PUBLIC": lambda context, position, annotation: "everyone",
    })
    assert registry.resolve({"team": 7}, "x", DirectiveAnnotation(scope_type="TEAM")) == "team:7"
    assert registry.resolve({}, "x", DirectiveAnnotation()) == "everyone"
    assert set(registry.labels) == {"PUBLIC", "CONTEXT", "TEAM"}


def test_invocation_resolves_each_position_once():
    seen = []

    def counting(context, position, annotation):
        seen.append(position)
        return "scope"

    invocation = Invocation({}, ScopeRegistry({"COUNT": counting}))
    annotation = DirectiveAnnotation(scope_type="COUNT")
    assert invocation.scope("A.id", annotation) == "scope"
    assert invocation.scope("A.id", annotation) == "scope"
    assert invocation.scope("B.id", annotation) == "scope"
    assert seen == ["A.id", "B.id"]

from pytest_archon import archrule


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from domain, ports, adapters, or dispatch.
    """
    (
        archrule("primitives_isolation")
        .match("deferred_dispatch.primitives*")
        .should_not_import("deferred_dispatch.domain*")
        .should_not_import("deferred_dispatch.ports*")
        .should_not_import("deferred_dispatch.adapters*")
        .should_not_import("deferred_dispatch.dispatch*")
        .check("deferred_dispatch")
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It must not import from ports, adapters, or dispatch.
    """
    (
        archrule("domain_isolation")
        .match("deferred_dispatch.domain*")
        .should_not_import("deferred_dispatch.ports*")
        .should_not_import("deferred_dispatch.adapters*")
        .should_not_import("deferred_dispatch.dispatch*")
        .check("deferred_dispatch")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations)
    or on the dispatch services that consume them.
    """
    (
        archrule("ports_layering")
        .match("deferred_dispatch.ports*")
        .should_not_import("deferred_dispatch.adapters*")
        .should_not_import("deferred_dispatch.dispatch*")
        .check("deferred_dispatch")
    )


def test_dispatch_depends_on_ports_only() -> None:
    """
    Dispatch services talk to the outside world through ports.
    Concrete adapters are wired in by the caller.
    """
    (
        archrule("dispatch_layering")
        .match("deferred_dispatch.dispatch*")
        .should_not_import("deferred_dispatch.adapters*")
        .check("deferred_dispatch")
    )

from pytest_archon import archrule


def test_engine_does_not_depend_on_adapters() -> None:
    """
    The query engine talks to ``IDataTransport`` only.
    Concrete transports are wired in by the caller.
    """
    (
        archrule("engine_independence")
        .match("p3_query.*")
        .exclude("p3_query.adapters*")
        .should_not_import("p3_query.adapters*")
        .check("p3_query", only_direct_imports=True)
    )


def test_engine_has_no_http_dependency() -> None:
    """Only the HTTP adapter may import httpx."""
    (
        archrule("engine_no_httpx")
        .match("p3_query*")
        .exclude("p3_query.adapters.http")
        .should_not_import("httpx*")
        .check("p3_query", only_direct_imports=True)
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("p3_query.ports")
        .should_not_import("p3_query.adapters*")
        .check("p3_query")
    )


def test_adapters_do_not_reach_into_the_engine() -> None:
    """Adapters depend on value types and ports, never on execution logic."""
    (
        archrule("adapters_isolation")
        .match("p3_query.adapters*")
        .should_not_import("p3_query.client")
        .should_not_import("p3_query.fetch")
        .should_not_import("p3_query.reconstruct")
        .should_not_import("p3_query.related")
        .check("p3_query", only_direct_imports=True)
    )


def test_value_types_are_leaves() -> None:
    """Exceptions, operators and functions import nothing else from the package."""
    (
        archrule("value_type_leaves")
        .match("p3_query.exceptions")
        .match("p3_query.operators")
        .match("p3_query.functions")
        .should_not_import("p3_query.*")
        .check("p3_query")
    )

from pytest_archon import archrule


def test_query_layer_is_storage_agnostic() -> None:
    """
    The query layer composes plain mappings for any ORM.
    It must not import SQLAlchemy or the adapter built on top of it.
    """
    (
        archrule("query_is_storage_agnostic")
        .match("portfolio_query*")
        .exclude("portfolio_query_sqlalchemy*")
        .should_not_import("sqlalchemy*")
        .should_not_import("portfolio_query_sqlalchemy*")
        .check("portfolio_query")
    )


def test_builders_are_pure() -> None:
    """
    Where/include/query builders and validators must not reach for
    configuration, logging setup or error-response handling.
    """
    (
        archrule("builders_are_pure")
        .match("portfolio_query.where")
        .match("portfolio_query.include")
        .match("portfolio_query.query")
        .match("portfolio_query.validators")
        .match("portfolio_query.pagination")
        .should_not_import("portfolio_query.config")
        .should_not_import("portfolio_query.errors")
        .should_not_import("dotenv*")
        .check("portfolio_query")
    )


def test_in_memory_evaluation_is_independent() -> None:
    """
    The in-memory evaluator mirrors the SQL compiler but must not depend on it.
    """
    (
        archrule("memory_evaluator_independence")
        .match("portfolio_query.matching")
        .match("portfolio_query.evaluator")
        .match("portfolio_query.operators_memory")
        .should_not_import("portfolio_query.where")
        .should_not_import("portfolio_query.query")
        .should_not_import("sqlalchemy*")
        .check("portfolio_query")
    )


def test_adapter_layering() -> None:
    """
    Operator strategies compile single clauses; they must not import the
    executor or the compiler that drives them.
    """
    (
        archrule("adapter_layering")
        .match("portfolio_query_sqlalchemy.operators")
        .match("portfolio_query_sqlalchemy.strategy")
        .should_not_import("portfolio_query_sqlalchemy.executor")
        .should_not_import("portfolio_query_sqlalchemy.compiler")
        .check("portfolio_query_sqlalchemy")
    )

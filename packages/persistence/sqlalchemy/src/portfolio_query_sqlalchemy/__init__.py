"""SQLAlchemy adapter: compile and run portfolio query descriptors."""

from .compiler import (
    COUNT_KEY,
    COUNT_LABEL_PREFIX,
    apply_include,
    apply_order_by,
    apply_query_descriptor,
    build_where,
    resolve_attribute,
    select_for,
)
from .engine import create_engine_from_settings, session_factory
from .errors import map_database_error
from .exceptions import SessionManagementError, SQLAlchemyQueryError
from .executor import DescriptorExecutor, record_to_dict
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    # Compilation
    "COUNT_KEY",
    "COUNT_LABEL_PREFIX",
    "apply_include",
    "apply_order_by",
    "apply_query_descriptor",
    "build_where",
    "resolve_attribute",
    "select_for",
    # Operators
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "build_default_sqla_registry",
    # Execution
    "DescriptorExecutor",
    "record_to_dict",
    "create_engine_from_settings",
    "session_factory",
    # Errors
    "SessionManagementError",
    "SQLAlchemyQueryError",
    "map_database_error",
]

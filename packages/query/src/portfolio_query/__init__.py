"""Query composition for the portfolio site: filters, descriptors, envelopes."""

from .config import Settings, configure_logging, get_settings
from .errors import handle_api_error, validation_response
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    ConfigurationError,
    ConflictError,
    FieldNotFoundError,
    MethodNotAllowedError,
    NotFoundError,
    OperatorNotFoundError,
    PortfolioQueryError,
    UnauthorizedError,
    ValidationError,
)
from .filters import PostFilter, ProjectFilter
from .include import build_post_include_clause, build_project_include_clause
from .listing import (
    apply_filters,
    calculate_total_pages,
    filter_and_sort_posts,
    filter_by_search,
    filter_by_tag,
    filter_by_topic,
    paginate,
    sort_posts,
)
from .matching import filter_where, matches
from .operators import LogicalOperator, RelationOperator, WhereOperator
from .operators_memory import build_default_registry
from .pagination import (
    Pagination,
    Sort,
    SortOrder,
    build_order_by,
    parse_pagination,
    parse_sort,
)
from .query import QueryDescriptor, build_post_query, build_project_query
from .reading_time import calculate_reading_time
from .response import DataKey, format_paginated_response
from .transformers import (
    map_project_status,
    transform_project_to_api_format,
    transform_projects_to_api_format,
    transform_team_to_team_members,
)
from .validators import (
    ValidationResult,
    combine_validations,
    validate_admin_project_data,
    validate_array_field,
    validate_array_fields,
    validate_email,
    validate_project_data,
    validate_required_fields,
    validate_team_member,
    validate_team_members,
)
from .where import (
    build_post_where_clause,
    build_project_where_clause,
    build_search_filter,
    remove_unset,
)

__all__ = [
    # Validation
    "ValidationResult",
    "combine_validations",
    "validate_admin_project_data",
    "validate_array_field",
    "validate_array_fields",
    "validate_email",
    "validate_project_data",
    "validate_required_fields",
    "validate_team_member",
    "validate_team_members",
    # Pagination / sort
    "Pagination",
    "Sort",
    "SortOrder",
    "build_order_by",
    "parse_pagination",
    "parse_sort",
    # Where / include / query
    "PostFilter",
    "ProjectFilter",
    "build_post_where_clause",
    "build_project_where_clause",
    "build_search_filter",
    "remove_unset",
    "build_post_include_clause",
    "build_project_include_clause",
    "QueryDescriptor",
    "build_post_query",
    "build_project_query",
    # Responses
    "DataKey",
    "format_paginated_response",
    # In-memory evaluation
    "WhereOperator",
    "LogicalOperator",
    "RelationOperator",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    "matches",
    "filter_where",
    "apply_filters",
    "calculate_total_pages",
    "filter_and_sort_posts",
    "filter_by_search",
    "filter_by_tag",
    "filter_by_topic",
    "paginate",
    "sort_posts",
    # Content helpers
    "calculate_reading_time",
    "map_project_status",
    "transform_project_to_api_format",
    "transform_projects_to_api_format",
    "transform_team_to_team_members",
    # Errors
    "PortfolioQueryError",
    "ConfigurationError",
    "ConflictError",
    "FieldNotFoundError",
    "MethodNotAllowedError",
    "NotFoundError",
    "OperatorNotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "handle_api_error",
    "validation_response",
    # Configuration
    "Settings",
    "configure_logging",
    "get_settings",
]

from enum import Enum

# Value of the ``mode`` key that switches string operators to case-insensitive
INSENSITIVE = "insensitive"
MODE_KEY = "mode"


class WhereOperator(str, Enum):
    """Field-level operators of the ``where`` DSL."""

    # Standard comparison
    EQUALS = "equals"
    NOT = "not"
    IN = "in"
    NOT_IN = "notIn"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"

    # String operations
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"

    # Scalar-list operations
    HAS = "has"
    HAS_SOME = "hasSome"
    HAS_EVERY = "hasEvery"
    IS_EMPTY = "isEmpty"


class LogicalOperator(str, Enum):
    """Keys that combine nested where mappings."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class RelationOperator(str, Enum):
    """Keys that filter through a relation."""

    SOME = "some"
    EVERY = "every"
    NONE = "none"
    IS = "is"
    IS_NOT = "isNot"


FIELD_OPERATORS: frozenset[str] = frozenset(m.value for m in WhereOperator)
RELATION_OPERATORS: frozenset[str] = frozenset(m.value for m in RelationOperator)

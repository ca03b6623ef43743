from __future__ import annotations

from typing import Any

from ..core.exceptions import BadRequestError

FILTER = "filter"
MUST = "must"
MUST_NOT = "must_not"
SHOULD = "should"
CLAUSE_GROUPS = (FILTER, MUST, MUST_NOT, SHOULD)

OPERATOR_EQUAL = "="
OPERATOR_NOT_EQUAL = "!="
OPERATOR_GREATER_THAN = ">"
OPERATOR_GREATER_THAN_OR_EQUAL = ">="
OPERATOR_LOWER_THAN = "<"
OPERATOR_LOWER_THAN_OR_EQUAL = "<="
OPERATOR_LIKE = "like"
OPERATOR_EXISTS = "exists"

OPERATORS = (
    OPERATOR_EQUAL,
    OPERATOR_NOT_EQUAL,
    OPERATOR_GREATER_THAN,
    OPERATOR_GREATER_THAN_OR_EQUAL,
    OPERATOR_LOWER_THAN,
    OPERATOR_LOWER_THAN_OR_EQUAL,
    OPERATOR_LIKE,
    OPERATOR_EXISTS,
)

# Marks an argument the caller did not pass.
NOT_SET: Any = object()


class ConditionTranslator:
    """Translates comparison operators into clause group and clause.

    Supported ops:
    - =             -> filter term
    - !=            -> must_not term
    - <, <=, >, >=  -> filter range
    - like          -> must match
    - exists        -> must exists, must_not when the value is falsy

    Negation moves filter and must clauses to must_not and the other
    way round.
    """

    range_map = {
        OPERATOR_GREATER_THAN: "gt",
        OPERATOR_GREATER_THAN_OR_EQUAL: "gte",
        OPERATOR_LOWER_THAN: "lt",
        OPERATOR_LOWER_THAN_OR_EQUAL: "lte",
    }

    @staticmethod
    def normalize(operator: Any, value: Any = NOT_SET) -> tuple[str, Any]:
        """Resolve the operator and value of a where call.

        When the value was not passed, a recognized operator token is
        kept as the operator, anything else becomes the value of an
        equality check. An unrecognized operator with a value falls
        back to equality.
        """
        if value is NOT_SET:
            if operator in OPERATORS:
                value = None
            else:
                operator, value = OPERATOR_EQUAL, operator
        elif operator not in OPERATORS:
            operator = OPERATOR_EQUAL
        if operator == OPERATOR_EXISTS and value is None:
            value = True
        return operator, value

    def translate(
        self,
        field: str,
        operator: str,
        value: Any,
        negate: bool = False,
    ) -> tuple[str, dict]:
        if operator == OPERATOR_EQUAL:
            group = MUST_NOT if negate else FILTER
            return group, {"term": {field: value}}

        if operator == OPERATOR_NOT_EQUAL:
            group = FILTER if negate else MUST_NOT
            return group, {"term": {field: value}}

        if operator in self.range_map:
            group = MUST_NOT if negate else FILTER
            return group, {"range": {field: {self.range_map[operator]: value}}}

        if operator == OPERATOR_LIKE:
            group = MUST_NOT if negate else MUST
            return group, {"match": {field: value}}

        if operator == OPERATOR_EXISTS:
            exists = bool(value) != negate
            group = MUST if exists else MUST_NOT
            return group, {"exists": {"field": field}}

        raise BadRequestError(f"Operator {operator} not supported")

    def translate_in(
        self, field: str, values: list, negate: bool = False
    ) -> tuple[str, dict]:
        group = MUST_NOT if negate else FILTER
        return group, {"terms": {field: values}}

    def translate_between(
        self, field: str, first: Any, last: Any, negate: bool = False
    ) -> tuple[str, dict]:
        group = MUST_NOT if negate else FILTER
        return group, {"range": {field: {"gte": first, "lte": last}}}

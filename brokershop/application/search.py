"""Search expressions for filtered listings.

A search expression is a ``;``-separated list of criteria, each made of
a field name, an operation and a value::

    name:ORCL;quantity>1500
    category:[1,2];price>70

``:`` is equality, or set membership when the value is a bracketed
list. ``<`` and ``>`` are strict comparisons on numeric fields. All
criteria must hold for a record to match.

Parsing is independent of any storage: ``parse_search`` produces raw
string criteria, ``bind_criteria`` checks them against a field schema
and converts values to the field types.
"""
import math
import re
from dataclasses import dataclass
from enum import Enum

from ..config import MAX_DB_INT


class SearchSyntaxError(ValueError):
    """Raised when a search expression or sorting option is invalid."""


class SearchOperation(str, Enum):
    EQUALITY = ":"
    GREATER_THAN = ">"
    LESS_THAN = "<"


class SortingDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: str) -> "SortingDirection":
        """Parse ``asc``/``desc`` in any case."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise SearchSyntaxError(f"Unknown sorting direction '{value}'") from None


@dataclass(frozen=True)
class SearchCriterion:
    """One ``field op value`` condition.

    ``value`` is a tuple for set membership and a scalar otherwise.
    """
    key: str
    operation: SearchOperation
    value: object

    @property
    def is_list(self) -> bool:
        return isinstance(self.value, tuple)


_CRITERION_RE = re.compile(r"^(\w+?)([:<>])(.*)$", re.DOTALL)
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_search(expression: str | None) -> list[SearchCriterion]:
    """Split a search expression into criteria.

    Empty segments are ignored, so a trailing ``;`` is accepted and an
    empty expression yields no criteria.

    Raises:
        SearchSyntaxError: On a malformed criterion
    """
    if not expression:
        return []

    criteria = []
    for part in expression.split(";"):
        part = part.strip()
        if part:
            criteria.append(_parse_criterion(part))
    return criteria


def _parse_criterion(part: str) -> SearchCriterion:
    match = _CRITERION_RE.match(part)
    if not match:
        raise SearchSyntaxError(f"Malformed search criterion '{part}'")

    key, op, raw = match.groups()
    operation = SearchOperation(op)
    raw = raw.strip()

    if raw.startswith("[") or raw.endswith("]"):
        if not (raw.startswith("[") and raw.endswith("]")):
            raise SearchSyntaxError(f"Unbalanced brackets in '{part}'")
        if operation is not SearchOperation.EQUALITY:
            raise SearchSyntaxError(f"A value list needs ':' in '{part}'")
        items = tuple(item.strip() for item in raw[1:-1].split(","))
        if any(not item for item in items):
            raise SearchSyntaxError(f"Empty item in value list '{part}'")
        return SearchCriterion(key=key.lower(), operation=operation, value=items)

    if not raw:
        raise SearchSyntaxError(f"Missing value in '{part}'")
    return SearchCriterion(key=key.lower(), operation=operation, value=raw)


def bind_criteria(
    criteria: list[SearchCriterion],
    field_types: dict[str, type]
) -> list[SearchCriterion]:
    """Validate criteria against a field schema and convert their values.

    Args:
        criteria: Parsed criteria with string values
        field_types: Allowed field names mapped to ``int``, ``float`` or ``str``

    Returns:
        New criteria carrying typed values

    Raises:
        SearchSyntaxError: Unknown field, comparison on a text field,
            or a value that does not convert
    """
    bound = []
    for criterion in criteria:
        field_type = field_types.get(criterion.key)
        if field_type is None:
            raise SearchSyntaxError(f"Unknown search field '{criterion.key}'")

        if criterion.operation is not SearchOperation.EQUALITY and field_type is str:
            raise SearchSyntaxError(
                f"Operation '{criterion.operation.value}' is not supported for '{criterion.key}'"
            )

        if criterion.is_list:
            value = tuple(_convert(criterion.key, item, field_type) for item in criterion.value)
        else:
            value = _convert(criterion.key, criterion.value, field_type)

        bound.append(SearchCriterion(criterion.key, criterion.operation, value))
    return bound


def _convert(key: str, raw: str, field_type: type):
    if field_type is str:
        return raw

    pattern = _INT_RE if field_type is int else _DECIMAL_RE
    if not pattern.fullmatch(raw):
        raise SearchSyntaxError(f"Invalid value '{raw}' for '{key}'")

    # Stored as signed 64-bit integers and finite doubles
    if field_type is int:
        in_range = len(raw.lstrip("+-")) <= 19 and abs(int(raw)) <= MAX_DB_INT
    else:
        in_range = math.isfinite(float(raw))
    if not in_range:
        raise SearchSyntaxError(f"Value '{raw}' for '{key}' is out of range")
    return field_type(raw)

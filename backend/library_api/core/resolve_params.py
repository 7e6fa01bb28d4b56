"""Parameter Resolution — merges JSON body, query string and defaults per field.

Invariants:
    - Source priority per field: body (non-empty) > query (non-empty) > default
    - "Empty" is None or "": 0 and False are real values
    - default_from resolves to another field's already-resolved value
    - Integer fields that do not parse raise InvalidArgumentError
    - Output has exactly one key per rule, in rule order

Design Decisions:
    - Each endpoint declares a tuple of FieldRule once, next to its handler,
      instead of scattering fallback expressions through the handler body
    - Rules referenced by default_from must appear earlier in the tuple
"""

from dataclasses import dataclass
from typing import Any, Mapping

from library_api.core.errors import InvalidArgumentError


@dataclass(frozen=True)
class FieldRule:
    """How one request field is resolved."""
    name: str
    kind: type = str
    default: Any = None
    default_from: str | None = None


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def coerce_value(rule: FieldRule, value: Any) -> Any:
    """Coerce a present value to the rule's kind."""
    if value is None:
        return None
    if rule.kind is int:
        if isinstance(value, bool):
            raise InvalidArgumentError(f"{rule.name} must be an integer", rule.name)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"{rule.name} must be an integer", rule.name)
    if rule.kind is str and not isinstance(value, str):
        return str(value)
    return value


def resolve_fields(
    rules: tuple[FieldRule, ...],
    body: Mapping[str, Any],
    query: Mapping[str, Any],
) -> dict[str, Any]:
    """Resolve every rule against body, then query, then its default."""
    resolved: dict[str, Any] = {}
    for rule in rules:
        value = body.get(rule.name)
        if is_empty(value):
            value = query.get(rule.name)
        if is_empty(value):
            if rule.default_from is not None:
                value = resolved.get(rule.default_from)
            else:
                value = rule.default
        resolved[rule.name] = coerce_value(rule, value)
    return resolved

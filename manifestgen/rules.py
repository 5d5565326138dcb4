"""Filter rules and first-writer-wins attribute resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .logging import get_logger
from .models import FilterRule, NamePattern

_ATTRIBUTE_SEPARATOR = ":"
_IMPLICIT_VALUE = "true"
# Attribute names become XML attribute names in the rendered manifest.
_XML_NAME = re.compile(r"[A-Za-z_][\w.-]*")

logger = get_logger("rules")


class FilterRuleError(ValueError):
    """Raised when a filter rule declares an unusable attribute."""


@dataclass
class Resolution:
    """Attributes and rule tags collected for one qualified example name."""

    attributes: Dict[str, str] = field(default_factory=dict)
    tags: Set[str] = field(default_factory=set)
    matched_rules: List[str] = field(default_factory=list)


def parse_attribute(token: str) -> Tuple[str, str]:
    """Split ``name:value`` into its parts; a bare ``name`` means ``true``.

    Only the first separator is significant, so ``"a:b:c"`` yields ``("a", "b:c")``.
    """
    name, sep, value = token.partition(_ATTRIBUTE_SEPARATOR)
    if not sep:
        return name, _IMPLICIT_VALUE
    return name, value


def build_rule(
    rule_id: str,
    names: Iterable[str],
    attributes: Iterable[str] = (),
    tags: Iterable[str] = (),
) -> FilterRule:
    """Create a rule, compiling its name patterns up front."""
    patterns: List[NamePattern] = []
    for name in names:
        if not name:
            continue
        pattern = NamePattern.compile(name)
        if pattern.drops_suffix:
            logger.debug(
                "Filter %s: pattern %r matches on prefix %r only", rule_id, name, pattern.text
            )
        patterns.append(pattern)

    parsed: List[Tuple[str, str]] = []
    for token in attributes:
        if not token:
            continue
        name, value = parse_attribute(token)
        if not _XML_NAME.fullmatch(name):
            raise FilterRuleError(f"Filter {rule_id}: invalid attribute name {name!r}")
        parsed.append((name, value))

    return FilterRule(
        id=rule_id,
        patterns=tuple(patterns),
        attributes=tuple(parsed),
        tags=frozenset(tag.strip().lower() for tag in tags if tag and tag.strip()),
    )


def parse_filter_rules(
    filters: Mapping[str, Mapping[str, Sequence[str]]],
    order: Optional[Sequence[str]] = None,
) -> List[FilterRule]:
    """Build the ordered rule list from ``{id: {names, attributes, tags}}``.

    ``order`` lists the filter ids to load; without it the mapping order is used.
    Ids listed in ``order`` but missing from ``filters`` load as empty rules.
    """
    ids = list(order) if order is not None else list(filters.keys())
    rules: List[FilterRule] = []
    seen: Set[str] = set()
    for rule_id in ids:
        if rule_id in seen:
            continue
        seen.add(rule_id)
        data = filters.get(rule_id) or {}
        rule = build_rule(
            rule_id,
            data.get("names") or (),
            data.get("attributes") or (),
            data.get("tags") or (),
        )
        if not rule.patterns:
            logger.debug("Filter %s has no names and will never match", rule_id)
        rules.append(rule)
    return rules


class AttributeResolver:
    """Applies every matching rule in declaration order, first writer wins per key."""

    def __init__(self, rules: Sequence[FilterRule]) -> None:
        self.rules: Tuple[FilterRule, ...] = tuple(rules)

    def resolve(
        self, qualified_name: str, seed: Optional[Mapping[str, str]] = None
    ) -> Resolution:
        resolution = Resolution(attributes=dict(seed or {}))
        used = set(resolution.attributes)
        for rule in self.rules:
            if not rule.matches(qualified_name):
                continue
            resolution.matched_rules.append(rule.id)
            resolution.tags.update(rule.tags)
            for name, value in rule.attributes:
                if name in used:
                    continue
                resolution.attributes[name] = value
                used.add(name)
        return resolution


def resolve(
    qualified_name: str,
    rules: Sequence[FilterRule],
    seed: Optional[Mapping[str, str]] = None,
) -> Resolution:
    """Resolve attributes and tags for ``qualified_name`` against ``rules``."""
    return AttributeResolver(rules).resolve(qualified_name, seed)


__all__ = [
    "AttributeResolver",
    "FilterRuleError",
    "Resolution",
    "build_rule",
    "parse_attribute",
    "parse_filter_rules",
    "resolve",
]

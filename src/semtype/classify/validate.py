"""Startup checks for the rule tables and type hierarchy.

Only run outside production (see config.is_prod). Each check returns a list of
violations; run_startup_checks decides whether to abort.
"""
import logging
import re
from typing import Dict, List, Optional, Sequence

from ..config import is_prod
from ..errors import RuleConfigError
from ..types import TYPES, TypeHierarchy
from .fields import FIELD_RULES, FieldRule
from .tables import ENGINE_ENTITY_TYPES, GENERIC_TABLE, TABLE_NAME_RULES, TableNameRule

logger = logging.getLogger(__name__)

# Inline flags like (?i) or (?i:...) make case irrelevant
_IGNORECASE_FLAG = re.compile(r'\(\?[a-zA-Z]*i[a-zA-Z]*[:)]')


def uppercase_literals(pattern: str) -> List[str]:
    """
    Uppercase letters the pattern must match literally.

    Escapes (\\A, \\N{...}), character classes and group names are skipped,
    since they can still match lowercase text.
    """
    if _IGNORECASE_FLAG.search(pattern):
        return []

    found = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == '\\':
            if pattern.startswith('N{', i + 1):
                end = pattern.find('}', i)
                i = n if end < 0 else end + 1
            else:
                i += 2
            continue
        if c == '[':
            j = i + 1
            if j < n and pattern[j] == '^':
                j += 1
            if j < n and pattern[j] == ']':
                j += 1
            while j < n and pattern[j] != ']':
                j += 2 if pattern[j] == '\\' else 1
            i = j + 1
            continue
        if pattern.startswith('(?P<', i) or pattern.startswith('(?P=', i):
            end = pattern.find('>' if pattern[i + 3] == '<' else ')', i + 4)
            i = n if end < 0 else end + 1
            continue
        if c.isupper():
            found.append(c)
        i += 1
    return found


def _check_pattern(where: str, pattern: str) -> List[str]:
    if not isinstance(pattern, str):
        return [f"{where}: pattern {pattern!r} is not a string"]
    try:
        re.compile(pattern)
    except re.error as e:
        return [f"{where}: invalid pattern {pattern!r} ({e})"]
    upper = uppercase_literals(pattern)
    if upper:
        return [f"{where}: pattern {pattern!r} has uppercase literal(s) {''.join(upper)} "
                f"and can never match a lowercased name"]
    return []


def validate_field_rules(
    rules: Sequence[FieldRule] = FIELD_RULES,
    hierarchy: TypeHierarchy = TYPES,
) -> List[str]:
    """Check every field rule's pattern compiles and every type it names is registered."""
    violations = []
    for i, rule in enumerate(rules):
        where = f"field rule {i} ({rule.pattern!r})"
        violations.extend(_check_pattern(where, rule.pattern))
        if rule.storage_types is not None:
            if not rule.storage_types:
                violations.append(f"{where}: empty storage type set can never match")
            for storage_type in sorted(rule.storage_types):
                if not hierarchy.is_registered(storage_type):
                    violations.append(f"{where}: unregistered storage type {storage_type}")
        if not hierarchy.is_registered(rule.semantic_type):
            violations.append(f"{where}: unregistered semantic type {rule.semantic_type}")
    return violations


def validate_table_rules(
    rules: Sequence[TableNameRule] = TABLE_NAME_RULES,
    engine_map: Optional[Dict[str, str]] = None,
    hierarchy: TypeHierarchy = TYPES,
) -> List[str]:
    """Check table name rules and the engine map reference registered entity kinds."""
    if engine_map is None:
        engine_map = ENGINE_ENTITY_TYPES
    violations = []
    for i, rule in enumerate(rules):
        where = f"table rule {i} ({rule.pattern!r})"
        violations.extend(_check_pattern(where, rule.pattern))
        if not hierarchy.is_registered(rule.entity_type):
            violations.append(f"{where}: unregistered entity type {rule.entity_type}")
    for engine, entity_type in engine_map.items():
        if engine != engine.lower():
            violations.append(f"engine {engine!r}: engine names must be lowercase")
        if not hierarchy.is_registered(entity_type):
            violations.append(f"engine {engine!r}: unregistered entity type {entity_type}")
    if not hierarchy.is_registered(GENERIC_TABLE):
        violations.append(f"default entity type {GENERIC_TABLE} is not registered")
    return violations


def collect_violations(hierarchy: TypeHierarchy = TYPES) -> List[str]:
    """All violations across the hierarchy and the built-in rule tables."""
    return (hierarchy.validate()
            + validate_field_rules(FIELD_RULES, hierarchy)
            + validate_table_rules(TABLE_NAME_RULES, ENGINE_ENTITY_TYPES, hierarchy))


def run_startup_checks(production: Optional[bool] = None) -> List[str]:
    """
    Validate rule tables at process start (non-production only).

    Args:
        production: Override for config.is_prod()

    Returns:
        Empty list when checks pass or were skipped

    Raises:
        RuleConfigError: if any violation is found
    """
    if production is None:
        production = is_prod()
    if production:
        return []

    violations = collect_violations()
    if violations:
        raise RuleConfigError(violations)
    logger.debug(f"Rule tables OK: {len(FIELD_RULES)} field rules, {len(TABLE_NAME_RULES)} table rules")
    return violations

"""Table classifier - infer a table's entity kind.

Three stages, in order:
1. Name rules (first match wins, substring search on the lowercased name)
2. Engine of the table's data source (e.g. Druid tables are event tables)
3. GENERIC_TABLE
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .fields import require_name

logger = logging.getLogger(__name__)

GENERIC_TABLE = 'type/GenericTable'


@dataclass(frozen=True)
class TableNameRule:
    """Name pattern -> entity kind"""
    pattern: str        # Regex searched in the lowercased table name
    entity_type: str    # "type/TransactionTable"


TABLE_NAME_RULES = (
    TableNameRule(r'order', 'type/TransactionTable'),
    TableNameRule(r'transaction', 'type/TransactionTable'),
    TableNameRule(r'sale', 'type/TransactionTable'),
    TableNameRule(r'product', 'type/ProductTable'),
    TableNameRule(r'user', 'type/UserTable'),
    TableNameRule(r'account', 'type/UserTable'),
    TableNameRule(r'people', 'type/UserTable'),
    TableNameRule(r'person', 'type/UserTable'),
    TableNameRule(r'event', 'type/EventTable'),
    TableNameRule(r'checkin', 'type/EventTable'),
    TableNameRule(r'log', 'type/EventTable'),
)

# Data source engine -> entity kind, used when no name rule matches
ENGINE_ENTITY_TYPES: Dict[str, str] = {
    'googleanalytics': 'type/GoogleAnalyticsTable',
    'druid': 'type/EventTable',
}


def entity_type_for_name(name: str, rules: Sequence[TableNameRule] = TABLE_NAME_RULES) -> Optional[str]:
    """First name rule match for `name`, or None."""
    name_lower = require_name(name, 'Table name')
    for rule in rules:
        if re.search(rule.pattern, name_lower):
            return rule.entity_type
    return None


def entity_type_for_engine(
    data_source_id: Any,
    engine_lookup,
    engine_map: Dict[str, str] = ENGINE_ENTITY_TYPES,
) -> Optional[str]:
    """
    Entity kind implied by the data source's engine, or None.

    Lookup failures are logged and treated the same as an unknown engine.
    """
    if engine_lookup is None:
        return None
    try:
        engine = engine_lookup.get_engine(data_source_id)
    except Exception as e:
        logger.warning(f"Engine lookup failed for data source {data_source_id!r}: {e}")
        return None
    if not engine:
        return None
    return engine_map.get(str(engine).lower())


def classify_table(
    name: str,
    data_source_id: Any,
    engine_lookup=None,
    rules: Sequence[TableNameRule] = TABLE_NAME_RULES,
    engine_map: Dict[str, str] = ENGINE_ENTITY_TYPES,
) -> str:
    """
    Infer the entity kind for a table. Always returns a tag.

    Args:
        name: Table name as stored (matching is case-insensitive)
        data_source_id: Id of the data source that owns the table
        engine_lookup: Object with get_engine(data_source_id) -> engine name or None
        rules: Ordered name rules; earlier rules win
        engine_map: Engine name -> entity kind

    Returns:
        Entity kind tag, GENERIC_TABLE when nothing more specific applies
    """
    return (entity_type_for_name(name, rules)
            or entity_type_for_engine(data_source_id, engine_lookup, engine_map)
            or GENERIC_TABLE)

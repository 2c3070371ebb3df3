"""Apply the classifiers to field and table records during sync"""
import logging
from dataclasses import replace
from typing import Iterable, List

from ..models import Field, Table, name_for_logging
from .fields import classify_field
from .tables import classify_table

logger = logging.getLogger(__name__)


def infer_semantic_type(field: Field) -> Field:
    """
    Return `field` with its semantic type inferred from its name and base type.

    If no rule applies the field is returned unchanged, keeping any semantic
    type it already had.
    """
    semantic_type = classify_field(field.name, field.base_type)
    if not semantic_type:
        return field
    logger.debug(f"Based on the name of {name_for_logging(field)}, "
                 f"we're giving it a semantic type of {semantic_type}.")
    return replace(field, semantic_type=semantic_type)


def infer_entity_type(table: Table, engine_lookup=None) -> Table:
    """Return `table` with its entity type set (GENERIC_TABLE at worst)."""
    entity_type = classify_table(table.name, table.db_id, engine_lookup)
    logger.debug(f"Based on the name of {name_for_logging(table)}, "
                 f"we're giving it entity type {entity_type}.")
    return replace(table, entity_type=entity_type)


def classify_fields(fields: Iterable[Field]) -> List[Field]:
    """Infer semantic types for a batch of fields."""
    return [infer_semantic_type(f) for f in fields]


def classify_tables(tables: Iterable[Table], engine_lookup=None) -> List[Table]:
    """Infer entity types for a batch of tables."""
    return [infer_entity_type(t, engine_lookup) for t in tables]

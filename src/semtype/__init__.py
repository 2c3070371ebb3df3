"""semtype - infer semantic types of fields and entity types of tables from their names"""
from semtype.classify import classify_field, classify_table, infer_semantic_type, infer_entity_type
from semtype.types import TYPES

__version__ = '0.1.0'

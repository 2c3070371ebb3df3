"""Name-based classifiers for fields and tables"""
from .fields import classify_field, FieldRule, FIELD_RULES, PK_TYPE
from .tables import (
    classify_table,
    TableNameRule,
    TABLE_NAME_RULES,
    ENGINE_ENTITY_TYPES,
    GENERIC_TABLE,
)
from .infer import infer_semantic_type, infer_entity_type, classify_fields, classify_tables
from .validate import (
    validate_field_rules,
    validate_table_rules,
    collect_violations,
    run_startup_checks,
)

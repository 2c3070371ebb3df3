"""Field classifier - infer a field's semantic type from its name and storage type.

Rules are scanned in order and the first match wins. A rule matches when the
field's storage type is (a subtype of) one of the rule's storage types and the
rule's pattern is found anywhere in the lowercased field name. Rules that need
an exact or suffix match carry their own ^ / $ anchors.
"""
import re
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence

from ..errors import InvalidInputError
from ..types import TYPES, TypeHierarchy

PK_TYPE = 'type/PK'

# Storage type groups
BOOL_OR_INT_TYPE = frozenset({'type/Boolean', 'type/Integer'})
FLOAT_TYPE = frozenset({'type/Float'})
INT_TYPE = frozenset({'type/Integer'})
INT_OR_TEXT_TYPE = frozenset({'type/Integer', 'type/Text'})
TEXT_TYPE = frozenset({'type/Text'})
TIMESTAMP_TYPE = frozenset({'type/DateTime'})
ANY_TYPE = None


@dataclass(frozen=True)
class FieldRule:
    """Name pattern + admissible storage types -> semantic type"""
    pattern: str                                 # Regex searched in the lowercased name
    storage_types: Optional[FrozenSet[str]]      # None = any storage type
    semantic_type: str                           # "type/Latitude"


FIELD_RULES = (
    FieldRule(r'^.*_lat$', FLOAT_TYPE, 'type/Latitude'),
    FieldRule(r'^.*_lon$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^.*_lng$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^.*_long$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^.*_longitude$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^.*_rating$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^.*_type$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^.*_url$', TEXT_TYPE, 'type/URL'),
    FieldRule(r'^_latitude$', FLOAT_TYPE, 'type/Latitude'),
    FieldRule(r'^active$', BOOL_OR_INT_TYPE, 'type/Category'),
    FieldRule(r'^city$', TEXT_TYPE, 'type/City'),
    FieldRule(r'^country$', TEXT_TYPE, 'type/Country'),
    FieldRule(r'^countrycode$', TEXT_TYPE, 'type/Country'),
    FieldRule(r'^currency$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^first_name$', TEXT_TYPE, 'type/Name'),
    FieldRule(r'^full_name$', TEXT_TYPE, 'type/Name'),
    FieldRule(r'^gender$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^last_name$', TEXT_TYPE, 'type/Name'),
    FieldRule(r'^lat$', FLOAT_TYPE, 'type/Latitude'),
    FieldRule(r'^latitude$', FLOAT_TYPE, 'type/Latitude'),
    FieldRule(r'^lon$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^lng$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^long$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^longitude$', FLOAT_TYPE, 'type/Longitude'),
    FieldRule(r'^name$', TEXT_TYPE, 'type/Name'),
    FieldRule(r'^postalcode$', INT_OR_TEXT_TYPE, 'type/ZipCode'),
    FieldRule(r'^postal_code$', INT_OR_TEXT_TYPE, 'type/ZipCode'),
    FieldRule(r'^rating$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^role$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^sex$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^state$', TEXT_TYPE, 'type/State'),
    FieldRule(r'^status$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^type$', INT_OR_TEXT_TYPE, 'type/Category'),
    FieldRule(r'^url$', TEXT_TYPE, 'type/URL'),
    FieldRule(r'^zip_code$', INT_OR_TEXT_TYPE, 'type/ZipCode'),
    FieldRule(r'^zipcode$', INT_OR_TEXT_TYPE, 'type/ZipCode'),
    # Substring rules - anywhere in the name
    FieldRule(r'discount', FLOAT_TYPE, 'type/Discount'),
    FieldRule(r'income', FLOAT_TYPE, 'type/Income'),
    FieldRule(r'amount', FLOAT_TYPE, 'type/Income'),
    FieldRule(r'total', FLOAT_TYPE, 'type/Income'),
    FieldRule(r'price', FLOAT_TYPE, 'type/Price'),
    FieldRule(r'quantity', INT_TYPE, 'type/Quantity'),
    FieldRule(r'count$', INT_TYPE, 'type/Quantity'),
    FieldRule(r'join', TIMESTAMP_TYPE, 'type/JoinTimestamp'),
    FieldRule(r'create', TIMESTAMP_TYPE, 'type/CreationTimestamp'),
    FieldRule(r'source', TEXT_TYPE, 'type/Source'),
    FieldRule(r'channel', TEXT_TYPE, 'type/Source'),
)


def require_name(name, what: str = 'name') -> str:
    """Return `name` lowercased, or raise InvalidInputError if it is blank."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError(f"{what} must be a non-blank string, got {name!r}")
    return name.lower()


def storage_type_matches(
    storage_type: str,
    allowed: Optional[FrozenSet[str]],
    hierarchy: TypeHierarchy = TYPES,
) -> bool:
    """True if `storage_type` is (a subtype of) one of `allowed`; None allows anything."""
    if allowed is None:
        return True
    return any(hierarchy.is_subtype_or_equal(storage_type, t) for t in allowed)


def classify_field(
    name: str,
    storage_type: str,
    rules: Sequence[FieldRule] = FIELD_RULES,
    hierarchy: TypeHierarchy = TYPES,
) -> Optional[str]:
    """
    Infer the semantic type for a field.

    Args:
        name: Field name as stored (matching is case-insensitive)
        storage_type: Declared storage type tag, e.g. "type/Float"
        rules: Ordered rule table; earlier rules win
        hierarchy: Type hierarchy used for storage type checks

    Returns:
        Semantic type tag, or None if no rule applies
    """
    name_lower = require_name(name, 'Field name')

    # Primary keys are recognised before the rule table, for any storage type
    if name_lower == 'id':
        return PK_TYPE

    for rule in rules:
        if storage_type_matches(storage_type, rule.storage_types, hierarchy) \
                and re.search(rule.pattern, name_lower):
            return rule.semantic_type

    return None

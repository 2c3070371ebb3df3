"""Field and table records exchanged with the sync pipeline"""
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Field:
    """A column as discovered by sync"""
    name: str                           # "user_lat"
    base_type: str                      # Storage type: "type/Float"
    id: Optional[int] = None
    table_name: Optional[str] = None    # Owning table, for log messages
    semantic_type: Optional[str] = None  # "type/Latitude" once classified


@dataclass(frozen=True)
class Table:
    """A table as discovered by sync"""
    name: str                           # "orders"
    db_id: Any                          # Id of the owning data source
    id: Optional[int] = None
    schema: Optional[str] = None        # "public"
    entity_type: Optional[str] = None   # "type/TransactionTable" once classified


def name_for_logging(obj: Union[Field, Table]) -> str:
    """
    Human-readable identifier for log messages.

    Examples: "Field 12 'orders.total'", "Table 'public.orders'"
    """
    if isinstance(obj, Field):
        kind, prefix = 'Field', obj.table_name
    else:
        kind, prefix = 'Table', obj.schema
    qualified = f"{prefix}.{obj.name}" if prefix else obj.name
    if obj.id is not None:
        return f"{kind} {obj.id} '{qualified}'"
    return f"{kind} '{qualified}'"

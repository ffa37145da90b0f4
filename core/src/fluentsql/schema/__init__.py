"""Schema builder.

    - Field: one column definition
    - Table: CREATE/DROP/ALTER TABLE rendering plus descriptors
    - SchemaCache: in-memory merge target for table descriptors
"""

from fluentsql.schema.cache import SchemaCache
from fluentsql.schema.descriptors import (
    AlterationDescriptor,
    FieldDescriptor,
    ForeignKeyDescriptor,
    TableDescriptor,
)
from fluentsql.schema.field import Field
from fluentsql.schema.table import Table

__all__ = [
    "Field",
    "Table",
    "SchemaCache",
    "FieldDescriptor",
    "ForeignKeyDescriptor",
    "TableDescriptor",
    "AlterationDescriptor",
]

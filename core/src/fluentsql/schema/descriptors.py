"""Structured descriptors exported by Field and Table.

The dict form of every descriptor uses the exact keys consumers of the
schema cache expect (``NOT NULL``, ``DROP COLUMN`` and so on).
"""

from typing import Dict, List, Optional

from pydantic import Field

from fluentsql.types import FluentSQLBaseModel


class FieldDescriptor(FluentSQLBaseModel):
    """Column description keyed by column name in table descriptors."""

    type: str = Field(..., description="Type with its length suffix, e.g. VARCHAR(255)")
    default: Optional[str] = Field(default=None, description="Pre-rendered default literal")
    not_null: bool = Field(default=False, alias="NOT NULL")
    unsigned: bool = Field(default=False, alias="UNSIGNED")
    auto_increment: bool = Field(default=False, alias="AUTO_INCREMENT")


class ForeignKeyDescriptor(FluentSQLBaseModel):
    """Reference target of a foreign key column."""

    references: str
    on: str


class TableDescriptor(FluentSQLBaseModel):
    """Full description of a table as produced by ``Table.get_table()``."""

    fields: Dict[str, FieldDescriptor] = Field(default_factory=dict)
    primary: Dict[str, List[str]] = Field(default_factory=dict)
    foreign: Dict[str, ForeignKeyDescriptor] = Field(default_factory=dict)
    charset: str
    collation: str
    engine: str


class AlterationDescriptor(FluentSQLBaseModel):
    """Columns added and dropped by an ALTER TABLE statement."""

    add: Dict[str, FieldDescriptor] = Field(default_factory=dict, alias="ADD")
    drop_column: Dict[str, FieldDescriptor] = Field(default_factory=dict, alias="DROP COLUMN")

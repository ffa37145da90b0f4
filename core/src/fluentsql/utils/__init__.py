"""Utility functions and helpers for fluentsql."""

from fluentsql.utils.decorators import traced
from fluentsql.utils.sql import StatementInfo, StatementInspector

__all__ = [
    "traced",
    "StatementInfo",
    "StatementInspector",
]

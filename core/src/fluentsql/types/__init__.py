"""Type definitions for fluentsql.

This module provides the base model used by the schema descriptors.
"""

from .base import FluentSQLBaseModel

__all__ = [
    'FluentSQLBaseModel',
]

"""Base model class for all fluentsql models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class FluentSQLBaseModel(BaseModel):
    """Base model for all fluentsql models with built-in serialization.

    Provides common functionality for all fluentsql models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration
    - Proper handling of nested models

    Descriptor keys such as ``NOT NULL`` are not valid Python identifiers, so
    models declare them as aliases and ``to_dict()`` dumps by alias.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True,
        populate_by_name=True,
    )

    def to_dict(self, exclude_none: bool = False) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested FluentSQLBaseModel instances to
        dictionaries keyed by alias.

        Args:
            exclude_none: Drop keys whose value is None

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if exclude_none and value is None:
                continue
            data[field.alias or name] = value

        def convert_nested(obj):
            if isinstance(obj, FluentSQLBaseModel):
                return obj.to_dict(exclude_none=exclude_none)
            elif isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_nested(item) for item in obj]
            elif hasattr(obj, 'value'):  # Handle enums
                return obj.value
            return obj

        return convert_nested(data)

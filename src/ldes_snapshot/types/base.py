"""Base model class for all ldes_snapshot models with serialization support."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from rdflib.term import Literal, Node


class SnapshotBaseModel(BaseModel):
    """Base model for all ldes_snapshot models with built-in serialization.

    Provides common functionality for all models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration (rdflib terms are arbitrary types)
    - Proper handling of nested models
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested models to dictionaries. rdflib terms are
        rendered in N3 notation so blank nodes and typed literals stay
        distinguishable.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, SnapshotBaseModel):
                return obj.to_dict()
            elif isinstance(obj, Node):
                return obj.n3()
            elif isinstance(obj, dict):
                return {convert_nested(k): convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_nested(item) for item in obj]
            elif hasattr(obj, 'isoformat'):
                return obj.isoformat()
            elif hasattr(obj, 'value') and not isinstance(obj, Literal):  # Handle enums
                return obj.value
            return obj

        return convert_nested(data)

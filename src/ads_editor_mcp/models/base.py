"""Base model with common configuration."""

from typing import Any

from pydantic import BaseModel as PydanticBaseModel


class BaseExportModel(PydanticBaseModel):
    """Base model for all export input and report models."""

    model_config = {
        # Use enum values instead of names
        "use_enum_values": True,
        # Validate on assignment
        "validate_assignment": True,
        # Allow population by field name
        "populate_by_name": True,
    }


def coerce_to_str(value: Any) -> Any:
    """Turn numeric inputs such as budgets and bids into their string form."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value

"""
Shared base for domain models

Python attributes are snake_case; the JSON wire format uses the camelCase
aliases declared on each field.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

# Storage column ranges: NUMERIC(12, 2) and INTEGER
MONEY_PLACES = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")
MAX_INTEGER = 2 ** 31 - 1


def to_json_types(value: Any) -> Any:
    """Convert Decimal to float and dates to ISO strings, recursively"""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: to_json_types(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_types(item) for item in value]
    return value


class DomainModel(BaseModel):
    # Pydantic v2 configuration
    model_config = ConfigDict(
        from_attributes=True,  # Allow creation from rows / other models
        populate_by_name=True,  # Accept snake_case names as well as aliases
        use_enum_values=True,
    )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary keyed by the wire aliases"""
        return to_json_types(self.model_dump(by_alias=True))

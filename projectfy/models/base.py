"""Base record model shared by every persisted entity."""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """
    A flat record identified by an opaque string id.

    Field names are snake_case in Python and camelCase in the stored JSON.
    Unknown keys are kept so records written by other app versions survive
    a load/save cycle untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """Dump to the stored JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @classmethod
    def from_json(cls, data: Dict[str, Any]):
        """Validate a stored JSON object."""
        return cls.model_validate(data)

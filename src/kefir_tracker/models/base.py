"""
Module: base.py
Description: Shared base model for records stored in the single table.

Records are pydantic models with snake_case fields and camelCase aliases,
so a DynamoDB item (``batchId``, ``photoKeys``, ``PK``...) validates
straight into a model and dumps back out unchanged.

Key Components:
- TableRecord: Base record with PK/SK and item/API serialization helpers

Dependencies: pydantic
Author: Kefir Tracker Team
"""

from typing import Any, ClassVar, Dict, Set

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TableRecord(BaseModel):
    """
    Base class for every entity persisted in the table.

    Attributes:
        pk: Partition key (``PK``)
        sk: Sort key (``SK``)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore"
    )

    # Key attributes never included in API payloads
    KEY_FIELDS: ClassVar[Set[str]] = {"pk", "sk"}

    pk: str = Field(..., alias="PK", description="Partition key")
    sk: str = Field(..., alias="SK", description="Sort key")

    def to_item(self) -> Dict[str, Any]:
        """Serialize to a DynamoDB item (camelCase, ``None`` dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_api(self) -> Dict[str, Any]:
        """Serialize for API responses, omitting table key attributes."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude=set(self.KEY_FIELDS),
            mode="json"
        )

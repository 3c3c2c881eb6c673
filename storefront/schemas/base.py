"""Shared base classes for stored records."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with the camelCase field names used in stored documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentModel(CamelModel):
    """Record that lives in a cached collection and a remote collection."""

    id: str = ""

    def to_document(self, *, include_id: bool = False) -> dict[str, Any]:
        """Dump to a storable dict; remote documents carry their id outside the body."""
        exclude = None if include_id else {"id"}
        return self.model_dump(by_alias=True, exclude=exclude, exclude_none=True)

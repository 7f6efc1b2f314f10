from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RegionCreate(BaseModel):
    """Accepts either ``{"region": ...}`` or ``{"name": ...}``."""

    region: str | None = None
    name: str | None = None

    @property
    def resolved_name(self) -> str:
        return (self.region or self.name or "").strip()


class RegionRename(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    old_region: str = Field(default="")
    new_region: str = Field(default="")

    @model_validator(mode="after")
    def _strip(self) -> RegionRename:
        self.old_region = self.old_region.strip()
        self.new_region = self.new_region.strip()
        return self


class RegionRenameResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    old_region: str
    new_region: str
    hotels_updated: int

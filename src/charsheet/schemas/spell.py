from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SrdSpell(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: str = Field(..., min_length=1, description="SRD identifier, e.g. ``fireball``")
    name: str = Field(..., min_length=1)
    level: int = Field(..., ge=0, le=9, description="Spell level; 0 for cantrips")
    school: str = Field(..., min_length=1)
    casting_time: str = Field(..., min_length=1)
    range: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    description: str = ""
    classes: list[str] = Field(default_factory=list)
    cached_at: datetime | None = Field(None, description="When the entry was cached")


class SpellFilters(BaseModel):
    """Optional search criteria; unset fields do not filter."""

    name: str | None = Field(None, description="Case-insensitive substring of the name")
    level: int | None = Field(None, ge=0, le=9)
    school: str | None = None
    class_name: str | None = Field(None, description="Class that must be able to cast the spell")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)

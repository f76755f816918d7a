"""
Pydantic models for structured MCP tool responses.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IndexSummary(BaseModel):
    """Projection of one index catalog entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: str
    health: Literal["green", "yellow", "red"] | None = None
    status: Literal["open", "close"] | None = None
    docs_count: int | None = Field(default=None, alias="docsCount")

    @field_validator("docs_count", mode="before")
    @classmethod
    def _parse_count(cls, value: Any) -> int | None:
        # _cat APIs report numbers as strings
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_catalog_entry(cls, entry: dict[str, Any]) -> "IndexSummary":
        """Project a raw ``_cat/indices`` entry, discarding every other field."""
        docs_count = entry.get("docs.count", entry.get("docsCount"))
        return cls(
            index=entry["index"],
            health=entry.get("health"),
            status=entry.get("status"),
            docsCount=docs_count,
        )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

"""Error response schema for 400 and registry failures.

``name`` carries a short machine-readable code (``query``, ``not_found``, ...).
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(alias="name")
    description: str

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

"""Health report models (draft-inadarei-api-health-check shape).

Keys are camelCase on the wire; unset fields are dropped when serializing.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HealthStatus = Literal["pass", "warn", "fail"]


class Check(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    component_id: Optional[str] = Field(default=None, alias="componentId")
    component_type: Optional[str] = Field(default=None, alias="componentType")
    observed_value: Optional[str] = Field(default=None, alias="observedValue")
    observed_unit: Optional[str] = Field(default=None, alias="observedUnit")
    status: Optional[str] = None
    affected_endpoints: Optional[list[str]] = Field(default=None, alias="affectedEndpoints")
    time: Optional[str] = None
    output: Optional[str] = None
    links: Optional[dict[str, str]] = None
    additional_keys: Optional[dict[str, str]] = Field(default=None, alias="additionalKeys")


class Health(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: HealthStatus
    version: Optional[str] = None
    release_id: Optional[str] = Field(default=None, alias="releaseId")
    notes: Optional[str] = None
    output: Optional[str] = None
    checks: Optional[dict[str, list[Check]]] = None
    links: Optional[dict[str, str]] = None
    service_id: Optional[str] = Field(default=None, alias="serviceId")
    description: Optional[str] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InfoResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    timestamp: str
    version: str
    environment: str
    deployed_by: Optional[str] = Field(default=None, alias="deployedBy")


class HealthResponse(BaseModel):
    status: str
    service: str

"""Metrics, health, logs and generic acknowledgement schemas."""

from pydantic import Field

from prd_creator.schemas.base import CamelModel
from prd_creator.schemas.provider import ProviderInfo


class EmptyArgs(CamelModel):
    pass


class SuccessResponse(CamelModel):
    success: bool = True
    file_path: str | None = None


class MetricResponse(CamelModel):
    name: str
    count: int


class HealthReport(CamelModel):
    db: bool = False
    providers: list[ProviderInfo] = []
    error: str | None = None


class LogsRequest(CamelModel):
    file_name: str = Field(default="combined.log", min_length=1)
    lines: int = Field(default=100, gt=0)

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok"]
    timestamp: str
    uptime: float
    version: str
    environment: str

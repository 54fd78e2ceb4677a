"""Error body returned by every failed request."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    message: str = Field(..., examples=["owner not found"])
    timestamp: datetime = Field(default_factory=datetime.now)
    # Per-field messages, only set for request validation failures.
    errors: Optional[List[str]] = None

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ReviewerResponse(BaseModel):
    reviewer: str
    enabled: bool
    enrolled_at: Optional[int] = None

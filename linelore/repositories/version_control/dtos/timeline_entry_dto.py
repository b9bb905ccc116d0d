"""TimelineEntryDto for the chronological merge of commits and external records."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class TimelineEntryDto(BaseModel):
    """One item on a merged timeline."""

    model_config = ConfigDict(frozen=True)

    kind: str
    date: datetime
    payload: Any

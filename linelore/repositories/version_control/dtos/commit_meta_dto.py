"""CommitMetaDto for representing commit metadata."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CommitMetaDto(BaseModel):
    """Data Transfer Object for commit metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    author: str
    authored_date: str  # ISO-8601 with the author's timezone offset
    subject: str
    author_email: Optional[str] = None

    @property
    def short_id(self) -> str:
        return self.id[:7]

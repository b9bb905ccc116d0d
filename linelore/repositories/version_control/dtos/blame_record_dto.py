"""BlameRecordDto for a single line's attribution."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class BlameRecordDto(BaseModel):
    """Attribution of one physical line in the queried range.

    ``commit_id`` is ``None`` for lines with no committed history
    (uncommitted edits), which is the unattributed marker.
    """

    model_config = ConfigDict(frozen=True)

    line_number: int
    commit_id: Optional[str] = None
    source_path: Optional[str] = None

    @property
    def is_attributed(self) -> bool:
        return self.commit_id is not None

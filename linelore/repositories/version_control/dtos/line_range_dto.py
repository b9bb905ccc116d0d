"""LineRangeDto for representing a 1-based inclusive line selection."""

from typing import Iterator

from pydantic import BaseModel, ConfigDict, model_validator


class LineRangeDto(BaseModel):
    """Data Transfer Object for a 1-based inclusive range of lines."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _validate_bounds(self) -> "LineRangeDto":
        if self.start < 1:
            raise ValueError(f"Line range start must be >= 1, got {self.start}")
        if self.start > self.end:
            raise ValueError(f"Line range start ({self.start}) must not exceed end ({self.end})")
        return self

    @property
    def size(self) -> int:
        """Number of lines covered by the range."""
        return self.end - self.start + 1

    def contains(self, line_number: int) -> bool:
        return self.start <= line_number <= self.end

    def overlaps(self, start: int, end: int) -> bool:
        """Check whether ``[start, end]`` intersects this range."""
        return end >= self.start and start <= self.end

    def lines(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

"""Price bar data models."""

import logging

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class PricePoint(BaseModel):
    """One observed OHLCV bar.

    ``timestamp`` is Unix epoch milliseconds. Only ``close`` is consumed by
    the indicator engine.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


class PriceBuffer(BaseModel):
    """Ordered bar container with non-decreasing timestamps."""

    points: list[PricePoint] = Field(default_factory=list)
    max_size: int | None = None

    def add(self, point: PricePoint) -> None:
        """Add a bar, replacing the last one if the timestamp is equal."""
        if self.points and point.timestamp <= self.points[-1].timestamp:
            if point.timestamp == self.points[-1].timestamp:
                self.points[-1] = point
            else:
                logger.debug(
                    "Dropping out-of-order bar %d (last=%d)",
                    point.timestamp,
                    self.points[-1].timestamp,
                )
            return

        self.points.append(point)
        if self.max_size is not None and len(self.points) > self.max_size:
            self.points = self.points[-self.max_size :]

    def __len__(self) -> int:
        return len(self.points)

"""Error taxonomy for the chart pipeline.

Every error names the pipeline stage that raised it so the HTTP layer can
report which part of the computation failed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ChartError(RuntimeError):
    stage = "chart"

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage:
            self.stage = stage

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "stage": self.stage, "message": self.message}


class InvalidTimeInput(ChartError):
    """Date, time or timezone could not be parsed or resolved."""

    stage = "time"


class InvalidLocationInput(ChartError):
    """Latitude or longitude outside the valid range."""

    stage = "location"


class UnsupportedAyanamsa(ChartError):
    stage = "sidereal"


class UnknownBodyError(ChartError):
    stage = "positions"


class HouseCalculationError(ChartError):
    """The provider could not resolve an ascendant; fatal for the chart."""

    stage = "houses"


class PositionCalculationError(ChartError):
    """A single body failed. The classifier logs and skips it."""

    stage = "positions"

    def __init__(self, message: str, *, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["body"] = self.body
        return data


class NoPositionsCalculated(ChartError):
    stage = "positions"


class DashaCalculationError(ChartError):
    """Raised when the Moon is unavailable; the dasha has no fallback."""

    stage = "dasha"


# Errors caused by the request itself rather than by the computation.
INPUT_ERRORS = (InvalidTimeInput, InvalidLocationInput, UnsupportedAyanamsa, UnknownBodyError)


__all__ = [
    "ChartError",
    "DashaCalculationError",
    "HouseCalculationError",
    "INPUT_ERRORS",
    "InvalidLocationInput",
    "InvalidTimeInput",
    "NoPositionsCalculated",
    "PositionCalculationError",
    "UnknownBodyError",
    "UnsupportedAyanamsa",
]

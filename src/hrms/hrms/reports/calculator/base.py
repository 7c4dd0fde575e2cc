from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceReportRow


class WorkingHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, row: AttendanceReportRow) -> Optional[int]:
        """Minutes worked, or None while the day is still open."""

        raise NotImplementedError

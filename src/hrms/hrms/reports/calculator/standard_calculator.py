from __future__ import annotations

from typing import Optional

from .base import WorkingHoursCalculator
from ...attendance.model import AttendanceReportRow


class StandardWorkingHoursCalculator(WorkingHoursCalculator):
    """Standard rule: check-out minus check-in, not below 0; open days count as None."""

    def worked_minutes(self, row: AttendanceReportRow) -> Optional[int]:
        if not row.check_in or not row.check_out:
            return None
        minutes = int((row.check_out - row.check_in).total_seconds() // 60)
        return max(minutes, 0)

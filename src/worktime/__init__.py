"""worktime package.

Rebuilds work shifts from raw punch events and accounts worked time per
employee. Organized by feature modules (punches, shifts, reports, ...) with a
thin Flask controller layer over service/repository layers.
"""

from .reports.aggregation import Period, total_duration
from .reports.formatting import format_duration
from .shifts.duration import shift_duration
from .shifts.reconstructor import reconstruct_shifts

__all__ = [
    "Period",
    "format_duration",
    "reconstruct_shifts",
    "shift_duration",
    "total_duration",
]

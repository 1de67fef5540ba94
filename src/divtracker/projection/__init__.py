"""Income projection and dividend scenarios."""

from divtracker.projection.calculator import compute_projection
from divtracker.projection.scenarios import (
    NO_SCENARIO,
    bearish_scenario,
    bullish_scenario,
    custom_scenario,
    effective_dividend,
    peak_scenario,
    reset_scenario,
    trough_scenario,
)

__all__ = [
    "NO_SCENARIO",
    "bearish_scenario",
    "bullish_scenario",
    "compute_projection",
    "custom_scenario",
    "effective_dividend",
    "peak_scenario",
    "reset_scenario",
    "trough_scenario",
]

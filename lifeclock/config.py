"""Configuration for the lifespan calculator and its live display."""

from dataclasses import dataclass


@dataclass
class LifeClockConfig:
    """Timings used by the presentation layer."""

    # Live update loop
    tick_interval: float = 1.0  # seconds between refreshes
    highlight_seconds: float = 0.2  # seconds fields flash after a change

    # Calculation trigger
    calculation_latency: float = 0.5  # delay before results are produced
    auto_calc_delay: float = 2.0  # idle time after typing before auto-calculating

    # Error annotations
    error_display_seconds: float = 4.0

    def __post_init__(self):
        """Reject timings the schedulers cannot honour."""
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        for name in ('highlight_seconds', 'calculation_latency',
                     'auto_calc_delay', 'error_display_seconds'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


# Global configuration instance
default_config = LifeClockConfig()

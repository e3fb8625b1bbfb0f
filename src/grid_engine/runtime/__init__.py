"""Runtime services (telemetry) shared by every layer."""

from . import telemetry

__all__ = ["telemetry"]

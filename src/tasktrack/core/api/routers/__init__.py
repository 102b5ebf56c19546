"""Core routers shared by every service."""

from .health import CheckResult, HealthCheck, HealthRouter, HealthState, HealthStatus, check_database, run_checks

__all__ = [
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "HealthCheck",
    "CheckResult",
    "check_database",
    "run_checks",
]

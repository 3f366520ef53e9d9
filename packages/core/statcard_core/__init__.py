"""Core services for settings, logging, diagnostics, and card rendering."""

from .config import AppConfig, load_config, save_config
from .diagnostics import DiagnosticsExporter, build_doctor_payload
from .performance import BudgetStatus, PerformanceController, PerformanceTargets
from .service import CardService

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "CardService",
    "DiagnosticsExporter",
    "PerformanceController",
    "PerformanceTargets",
    "build_doctor_payload",
    "load_config",
    "save_config",
]

"""Logging, configuration and performance helpers."""
from .config import load_config
from .logger import MatchLogger, setup_logging
from .performance import PerformanceMonitor

__all__ = ["load_config", "MatchLogger", "setup_logging", "PerformanceMonitor"]

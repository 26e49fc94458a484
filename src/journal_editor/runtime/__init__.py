"""Runtime services: telemetry and configuration."""

from .config import EditorConfig

__all__ = ["EditorConfig"]

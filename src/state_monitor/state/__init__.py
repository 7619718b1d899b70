"""
Observable application state used with the monitor.
"""

from .app_state import AppState

__all__ = ["AppState"]

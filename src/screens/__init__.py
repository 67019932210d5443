"""
Modal screens for the Chatbot Console application.
"""
from .mode_select_screen import ModeSelectScreen

__all__ = ["ModeSelectScreen"]

"""
Custom UI widgets for the Chatbot Console application.
"""
from .input_area import InputArea
from .chat_log import ChatLog
from .thinking_indicator import ThinkingIndicator

__all__ = ["InputArea", "ChatLog", "ThinkingIndicator"]

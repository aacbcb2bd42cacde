"""
Capture: turn host change notifications into EventLog entries.

This module provides:
- CaptureListener: Interface a host adapter calls on change/focus notifications
- RecordingSession: The capture filter and its recording state
- feed_notifications: Adapter for JSON-lines host notifications
"""

from ..core.document import ContentChange
from .listener import CaptureListener
from .session import RecordingSession
from .adapter import feed_notifications, parse_notification

__all__ = [
    "ContentChange",
    "CaptureListener",
    "RecordingSession",
    "feed_notifications",
    "parse_notification",
]

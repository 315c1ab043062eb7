from notifier.detector import Detection, EmptySnapshot, detect_new
from notifier.engine import Callback, Notifier, Signal, StopHandle

__all__ = [
    "Callback",
    "Detection",
    "EmptySnapshot",
    "Notifier",
    "Signal",
    "StopHandle",
    "detect_new",
]

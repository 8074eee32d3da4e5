from .tracker import ClientHost, ClientLocaleTracker, TrackerResult, detect_base_path, join_base, strip_base

__all__ = [
    "ClientHost",
    "ClientLocaleTracker",
    "TrackerResult",
    "detect_base_path",
    "join_base",
    "strip_base",
]

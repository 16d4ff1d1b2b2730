"""UI notification sink and its implementations."""

from neonrun.ui.sink import RecordingSink, ScreenName, TextField, UiSink

__all__ = ["RecordingSink", "ScreenName", "TextField", "UiSink"]

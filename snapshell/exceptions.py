class SnapshellError(Exception):
    """Base class for errors reported by snapshell."""


class ApiError(SnapshellError):
    """The completion request failed: transport, HTTP status, or response shape."""


class HistoryError(SnapshellError):
    """The history log could not be read or written."""

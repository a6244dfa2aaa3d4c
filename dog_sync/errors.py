# dog_sync/errors.py


class SyncError(Exception):
    """Terminal failure of one sync invocation, rendered as a JSON error body."""

    status = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.message, **self.context}


class MissingIdentifier(SyncError):
    status = 400


class MissingConfiguration(SyncError):
    status = 500


class DownstreamWriteError(SyncError):
    status = 502

    def __init__(self, message: str, details: str, status_code: int | None = None, **context):
        super().__init__(message, details=details, **context)
        self.details = details
        self.status_code = status_code


class DownstreamLocateError(Exception):
    """Product search failed. Never surfaced to the webhook caller."""

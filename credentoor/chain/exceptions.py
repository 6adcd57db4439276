"""Exceptions for chain access."""


class BeaconAPIError(Exception):
    """Error from Beacon API."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Beacon API error {status}: {message}")


class StateNotFoundError(BeaconAPIError):
    """State not found error."""

    def __init__(self, message: str):
        super().__init__(404, message)


class SnapshotFileError(Exception):
    """Offline preparation file is missing or malformed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")

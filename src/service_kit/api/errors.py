class ApiBootstrapError(Exception):
    """Base exception for API bootstrapping"""

    pass


class ApiSpecError(ApiBootstrapError):
    """Raised when the API document cannot be loaded"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load API document {path}: {reason}")

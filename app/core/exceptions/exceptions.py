class AppError(Exception):
    """Base class for all application-level errors."""
    pass


class DomainError(AppError):
    """Base for request/query errors raised by the core."""
    pass

class InvalidInputError(DomainError):
    def __init__(self, field: str = "search"):
        self.field = field
        self.message = f"Missing or invalid '{field}' query parameter."
        super().__init__(self.message)



class InfrastructureError(AppError):
    """Base for infrastructure-related errors (files, parsing, etc)."""
    pass

class StoreUnavailableError(InfrastructureError):
    def __init__(self, source: str, detail: str = ""):
        self.source = source
        self.detail = detail
        self.message = f"Topic store '{source}' is unavailable: {detail}"
        super().__init__(self.message)

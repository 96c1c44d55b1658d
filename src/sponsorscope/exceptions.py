"""
Custom exception hierarchy for Sponsorscope.

Each category maps to one HTTP status in the API layer: validation
errors become 400, lookup misses 404 and store failures 500.
"""


class SponsorscopeError(Exception):
    """Base exception for all Sponsorscope errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# --- Validation Exceptions ---


class ValidationError(SponsorscopeError):
    """Base exception for input validation errors."""
    pass


class InvalidInputError(ValidationError):
    """Raised when a company name query is too short to search on."""

    def __init__(self, query: str, min_length: int = 2):
        super().__init__(
            message=f"Company name must be at least {min_length} characters long",
            details={"query": query, "min_length": min_length},
        )


# --- Lookup Exceptions ---


class LookupFailedError(SponsorscopeError):
    """Base exception for well-formed lookups that found nothing usable."""
    pass


class SponsorNotFoundError(LookupFailedError):
    """Raised when a company profile query matches no register entries."""

    suggestion = "Check spelling or try a partial company name"

    def __init__(self, query: str):
        super().__init__(
            message="Company not found in official sponsorship register",
            details={"query": query, "suggestion": self.suggestion},
        )


# --- Store Exceptions ---


class StoreError(SponsorscopeError):
    """Base exception for sponsor register store errors."""
    pass


class StoreConnectionError(StoreError):
    """Raised when the register database cannot be reached."""
    pass


class StoreQueryError(StoreError):
    """Raised when a query against the register fails."""
    pass


# --- Ingestion Exceptions ---


class RegisterFormatError(SponsorscopeError):
    """Raised when a register CSV is missing required columns."""

    def __init__(self, path: str, missing: list[str]):
        super().__init__(
            message=f"Register file '{path}' is missing columns: {', '.join(missing)}",
            details={"path": path, "missing": missing},
        )


class RegisterReadError(SponsorscopeError):
    """Raised when a register file cannot be opened or parsed as CSV."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Could not read register file '{path}': {reason}",
            details={"path": path, "reason": reason},
        )

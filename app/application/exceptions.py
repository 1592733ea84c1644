class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (bad format or missing data)."""
    pass


class SessionNotFoundError(LookupError):
    """Raised when a planning session is requested for a thread that has none."""
    pass


class SelectionIndexError(LookupError):
    """Raised when removing a vendor selection that does not exist."""
    pass

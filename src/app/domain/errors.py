from __future__ import annotations


class BrewError(Exception):
    pass


class ProviderError(BrewError):
    """The text-generation provider did not produce a usable artifact."""
    pass


class ProviderEmptyError(ProviderError):
    def __init__(self, message: str = "Empty response from Gemini"):
        super().__init__(message)


class ProviderUnparseableError(ProviderError):
    def __init__(self, reason: str):
        super().__init__(f"Gemini response does not match the recipe schema: {reason}")
        self.reason = reason


class ProviderUnavailableError(ProviderError):
    def __init__(self, reason: str):
        super().__init__(f"Gemini unavailable: {reason}")
        self.reason = reason


class ProviderTimeoutError(ProviderUnavailableError):
    def __init__(self, timeout_seconds: float):
        super().__init__(f"request timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class GenerationConfigurationError(BrewError):
    def __init__(self, message: str = "Gemini API key not configured and generation failed"):
        super().__init__(message)


class StoreError(BrewError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class StoreUnavailableError(StoreError):
    pass


class MessageNotFoundError(BrewError):
    def __init__(self, message_id: str):
        super().__init__(f"Message not found: {message_id}")
        self.message_id = message_id

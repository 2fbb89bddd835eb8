"""
Error taxonomy for the analysis pipeline.

  ProviderInvocationError   — network / HTTP / SDK failure talking to a provider
  ResponseParseError        — provider answered, but not with a usable JSON object
  AllProvidersExhaustedError — every provider in the chain failed (terminal)

The first two are recoverable: the provider manager catches them and moves on
to the next provider. The last one never reaches the caller as an exception;
pipeline.py turns it into a {"success": false} envelope.
"""
from __future__ import annotations


class PipelineError(Exception):
    """Base class for everything the pipeline raises on purpose."""


class ProviderInvocationError(PipelineError):
    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        super().__init__(f"[{provider_name}] {message}")


class ResponseParseError(PipelineError, ValueError):
    """Fence-stripped provider text is not a single structured JSON object."""


class AllProvidersExhaustedError(PipelineError):
    def __init__(self, attempts: list[str], last_error: Exception | None):
        self.attempts = attempts
        self.last_error = last_error
        message = str(last_error) if last_error else "No vision providers configured"
        super().__init__(message)

"""Service layer exports."""

from .credential_issuer import CredentialIssuer, IssuanceOutcome, SampleCredentialIssuer
from .state_tokens import StateGenerationError, StateTokenManager

__all__ = [
    "CredentialIssuer",
    "IssuanceOutcome",
    "SampleCredentialIssuer",
    "StateGenerationError",
    "StateTokenManager",
]

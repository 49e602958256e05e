"""
Success collaborator invoked once an authorization code has been exchanged.

A production deployment plugs in credential issuance or session creation here.
The bundled issuer answers with a fixed sample credential.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic import BaseModel, model_validator

from relying_party.models.oauth import ExchangeResult
from relying_party.schemas.credential import SAMPLE_CREDENTIAL, VerifiableCredential


class IssuanceOutcome(BaseModel):
    """Either a redirect target or a document to serialize, never both."""

    redirect_to: Optional[str] = None
    document: Optional[VerifiableCredential] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "IssuanceOutcome":
        if (self.redirect_to is None) == (self.document is None):
            raise ValueError("Provide exactly one of redirect_to or document.")
        return self


class CredentialIssuer(Protocol):
    async def issue(self, result: ExchangeResult) -> IssuanceOutcome: ...


class SampleCredentialIssuer:
    """Return the same sample verifiable credential for every login."""

    def __init__(self, credential: VerifiableCredential = SAMPLE_CREDENTIAL) -> None:
        self._credential = credential

    async def issue(self, result: ExchangeResult) -> IssuanceOutcome:
        return IssuanceOutcome(document=self._credential)


__all__ = ["CredentialIssuer", "IssuanceOutcome", "SampleCredentialIssuer"]

"""Pydantic schemas exposed through the API."""

from .credential import (
    SAMPLE_CREDENTIAL,
    CredentialProof,
    CredentialStatus,
    CredentialSubject,
    IssuerInfo,
    VerifiableCredential,
)

__all__ = [
    "SAMPLE_CREDENTIAL",
    "CredentialProof",
    "CredentialStatus",
    "CredentialSubject",
    "IssuerInfo",
    "VerifiableCredential",
]

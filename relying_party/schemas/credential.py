"""Schemas describing the credential document returned after a successful login."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialSubject(BaseModel):
    id: str


class IssuerInfo(BaseModel):
    id: str
    name: Optional[str] = None


class CredentialProof(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    created: str
    proof_purpose: str = Field(..., alias="proofPurpose")
    verification_method: str = Field(..., alias="verificationMethod")
    jws: str


class CredentialStatus(BaseModel):
    id: str
    type: str


class VerifiableCredential(BaseModel):
    """W3C verifiable credential document serialized with its JSON-LD field names."""

    model_config = ConfigDict(populate_by_name=True)

    context: str | list[str] = Field(..., alias="@context")
    id: str
    type: str | list[str]
    credential_subject: CredentialSubject = Field(..., alias="credentialSubject")
    issuer: IssuerInfo
    issuance_date: str = Field(..., alias="issuanceDate")
    proof: Optional[CredentialProof] = None
    expiration_date: Optional[str] = Field(None, alias="expirationDate")
    credential_status: Optional[CredentialStatus] = Field(None, alias="credentialStatus")

    def to_document(self) -> dict:
        """Return the JSON-ready document using the JSON-LD field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


SAMPLE_CREDENTIAL = VerifiableCredential.model_validate(
    {
        "@context": "https://www.w3.org/2018/credentials/v1",
        "id": "http://example.edu/credentials/1872",
        "type": "VerifiableCredential",
        "credentialSubject": {"id": "did:example:ebfeb1f712ebc6f1c276e12ec21"},
        "issuer": {
            "id": "did:example:76e12ec712ebc6f1c221ebfeb1f",
            "name": "Example University",
        },
        "issuanceDate": "2010-01-01T19:23:24Z",
        "proof": {
            "type": "RsaSignature2018",
            "created": "2018-06-18T21:19:10Z",
            "proofPurpose": "assertionMethod",
            "verificationMethod": "https://example.com/jdoe/keys/1",
            "jws": (
                "eyJhbGciOiJQUzI1NiIsImI2NCI6ZmFsc2UsImNyaXQiOlsiYjY0Il19"
                "..DJBMvvFAIC00nSGB6Tn0XKbbF9XrsaJZREWvR2aONYTQQxnyXirtXnlewJMBBn2h9h"
                "fcGZrvnC1b6PgWmukzFJ1IiH1dWgnDIS81BH-IxXnPkbuYDeySorc4QU9MJxdVkY5EL4"
                "HYbcIfwKj6X4LBQ2_ZHZIu1jdqLcRZqHcsDF5KKylKc1THn5VRWy5WhYg_gBnyWny8E6"
                "Qkrze53MR7OuAmmNJ1m1nN8SxDrG6a08L78J0-Fbas5OjAQz3c17GY8mVuDPOBIOVjMEg"
                "hBlgl3nOi1ysxbRGhHLEK4s0KKbeRogZdgt1DkQxDFxxn41QWDw_mmMCjs9qxg0zcZzqEJw"
            ),
        },
        "expirationDate": "2020-01-01T19:23:24Z",
        "credentialStatus": {
            "id": "https://example.edu/status/24",
            "type": "CredentialStatusList2017",
        },
    }
)


__all__ = [
    "SAMPLE_CREDENTIAL",
    "CredentialProof",
    "CredentialStatus",
    "CredentialSubject",
    "IssuerInfo",
    "VerifiableCredential",
]

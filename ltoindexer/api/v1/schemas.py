"""
Pydantic schemas for API v1 responses

This module defines the response models of the read-only index API.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class AnchorResponse(BaseModel):
    """Transactions that anchored a hash"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "hash": "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae",
                "transactions": ["7QsRtTrAwRyvjTSkmHUXY3XMBwuoXmfnHZ1Pz6eQrR1S"]
            }
        }
    )

    hash: str = Field(..., description="Hex encoded hash")
    transactions: List[str] = Field(default_factory=list, description="Ids of the anchoring transactions")


class PublicKeyResponse(BaseModel):
    address: str
    public_key: Optional[str] = Field(None, description="Base58 public key, if seen on chain")


class VerificationMethodResponse(BaseModel):
    """Active verification method"""
    sender: str
    recipient: str
    relationships: int = Field(..., description="Relationship bitmask")
    relationship_names: List[str] = Field(default_factory=list)
    created_at: int = Field(..., description="Seconds since epoch")


class RoleIssue(BaseModel):
    role: str
    type: int


class TrustNetworkResponse(BaseModel):
    """Aggregated trust network roles of an address"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "roles": ["validator"],
                "issues_roles": [{"role": "node", "type": 200}],
                "issues_authorization": ["tx:anchor"]
            }
        }
    )

    roles: List[str] = Field(default_factory=list)
    issues_roles: List[RoleIssue] = Field(default_factory=list)
    issues_authorization: List[str] = Field(default_factory=list)


class AssociationsResponse(BaseModel):
    children: List[str] = Field(default_factory=list)
    parents: List[str] = Field(default_factory=list)


class TransactionPageResponse(BaseModel):
    """Page of the transaction history of an address"""
    type: str
    address: str
    total: int
    limit: int
    offset: int
    transactions: List[str] = Field(default_factory=list)


class TxStatsPeriod(BaseModel):
    period: str = Field(..., description="Start of the day, 'YYYY-MM-DD 00:00:00'")
    count: int


class ProcessingHeightResponse(BaseModel):
    height: Optional[int] = Field(None, description="Last fully processed block height")

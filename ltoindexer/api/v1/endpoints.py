"""
API endpoints for the LTO Chain Indexer

This module exposes the indexes built by the monitor: anchors, public keys,
verification methods, trust network roles, associations, per-address
transaction history and daily transaction statistics.
"""
from datetime import date
from typing import List
import time

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ltoindexer.api.v1.schemas import (
    AnchorResponse, PublicKeyResponse, VerificationMethodResponse,
    TrustNetworkResponse, AssociationsResponse, TransactionPageResponse,
    TxStatsPeriod, ProcessingHeightResponse
)
from ltoindexer.core.errors import StorageUnavailable
from ltoindexer.core.transaction_types import get_type_names
from ltoindexer.indexer.trust_network import TrustNetworkService
from ltoindexer.indexer.verification_method import VerificationMethodService
from ltoindexer.storage.storage_service import StorageService, PROCESSING_HEIGHT_KEY

router = APIRouter(prefix="/api/v1", tags=["LTO Indexer"])

MAX_STATS_DAYS = 366


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def get_trust_network(request: Request) -> TrustNetworkService:
    return request.app.state.trust_network


@router.get("/health")
async def health_check(storage: StorageService = Depends(get_storage)):
    """Health check endpoint"""
    try:
        height = await storage.storage.get_value(PROCESSING_HEIGHT_KEY)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {e}")
    return {"status": "healthy", "processing_height": int(height) if height else None, "timestamp": time.time()}


@router.get("/anchors/{hash_hex}", response_model=AnchorResponse)
async def get_anchor(hash_hex: str, storage: StorageService = Depends(get_storage)):
    """Transactions that anchored a hash"""
    try:
        bytes.fromhex(hash_hex)
    except ValueError:
        raise HTTPException(status_code=400, detail="Hash must be hex encoded")

    transactions = await storage.get_anchor(hash_hex)
    if not transactions:
        raise HTTPException(status_code=404, detail=f"Hash '{hash_hex}' not found")
    return AnchorResponse(hash=hash_hex.lower(), transactions=transactions)


@router.get("/public-keys/{address}", response_model=PublicKeyResponse)
async def get_public_key(address: str, storage: StorageService = Depends(get_storage)):
    return PublicKeyResponse(address=address, public_key=await storage.get_public_key(address))


@router.get("/verification-methods/{address}", response_model=List[VerificationMethodResponse])
async def get_verification_methods(address: str, storage: StorageService = Depends(get_storage)):
    """Active verification methods of an address"""
    methods = await VerificationMethodService(storage).get_verification_methods(address)
    return [
        VerificationMethodResponse(
            sender=method.sender,
            recipient=method.recipient,
            relationships=method.relationships,
            relationship_names=method.relationship_names(),
            created_at=method.created_at
        )
        for method in methods
    ]


@router.get("/trust-network/{address}", response_model=TrustNetworkResponse)
async def get_trust_network_roles(address: str, trust_network: TrustNetworkService = Depends(get_trust_network)):
    return await trust_network.get_roles(address)


@router.get("/associations/{address}", response_model=AssociationsResponse)
async def get_associations(address: str, storage: StorageService = Depends(get_storage)):
    return await storage.get_associations(address)


@router.get("/transactions/{tx_type}/{address}", response_model=TransactionPageResponse)
async def get_transactions(
        tx_type: str,
        address: str,
        limit: int = Query(25, ge=1, le=100),
        offset: int = Query(0, ge=0),
        storage: StorageService = Depends(get_storage)
):
    """Transaction ids of a type for an address, oldest first"""
    if tx_type not in get_type_names():
        raise HTTPException(status_code=400, detail=f"Unknown transaction type '{tx_type}'")

    return TransactionPageResponse(
        type=tx_type,
        address=address,
        total=await storage.count_tx(tx_type, address),
        limit=limit,
        offset=offset,
        transactions=await storage.get_tx(tx_type, address, limit, offset)
    )


@router.get("/stats/transactions/{tx_type}", response_model=List[TxStatsPeriod])
async def get_tx_stats(
        tx_type: str,
        from_date: date = Query(..., description="First day (YYYY-MM-DD)"),
        to_date: date = Query(..., description="Last day (YYYY-MM-DD)"),
        storage: StorageService = Depends(get_storage)
):
    """Number of transactions of a type per day"""
    if tx_type not in get_type_names():
        raise HTTPException(status_code=400, detail=f"Unknown transaction type '{tx_type}'")
    if to_date < from_date:
        raise HTTPException(status_code=400, detail="to_date must not be before from_date")
    if (to_date - from_date).days >= MAX_STATS_DAYS:
        raise HTTPException(status_code=400, detail=f"Period is limited to {MAX_STATS_DAYS} days")

    epoch = date(1970, 1, 1)
    return await storage.get_tx_stats(tx_type, (from_date - epoch).days, (to_date - epoch).days)


@router.get("/processing-height", response_model=ProcessingHeightResponse)
async def get_processing_height(storage: StorageService = Depends(get_storage)):
    return ProcessingHeightResponse(height=await storage.get_processing_height())

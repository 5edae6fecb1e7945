"""
Trust network roles for the LTO Chain Indexer.

Roles are granted through associations: when an address that holds a role
issues an association whose type matches one of the roles it may issue, the
party receives that role. What each role may issue is defined in a static
role definition table loaded from the configuration:

    {
        "authority": {
            "description": "Trust network authority",
            "issues": [{"role": "university", "type": 100}],
            "authorization": ["https://example.com/claims/diploma"]
        }
    }
"""

import logging
from typing import Any

from ltoindexer.core.secure_logging import sanitize_for_log
from ltoindexer.core.transaction import Transaction
from ltoindexer.core.transaction_types import ASSOCIATION_INVOKE_TYPE, ASSOCIATION_REVOKE_TYPE
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


class TrustNetworkService:
    """Resolves and indexes trust network roles"""

    def __init__(self, storage: StorageService, role_definitions: dict[str, Any]):
        """
        Args:
            storage: Storage service
            role_definitions: Role name -> {"issues": [...], "authorization": [...]}
        """
        self.storage = storage
        self.role_definitions = role_definitions or {}

    async def get_roles(self, address: str) -> dict[str, list]:
        """
        Aggregate the roles assigned to an address against the role definitions.

        Assigned roles missing from the definition table are ignored.
        issues_roles is deduplicated by role name (first occurrence wins) and
        issues_authorization by exact value.

        Returns:
            {"roles": [...], "issues_roles": [...], "issues_authorization": [...]}
        """
        result = {
            "roles": [],
            "issues_roles": [],
            "issues_authorization": []
        }

        assigned = await self.storage.get_raw_roles(address)

        for role in assigned:
            definition = self.role_definitions.get(role)
            if not definition:
                continue

            result["roles"].append(role)

            for issues in definition.get("issues") or []:
                if all(each["role"] != issues["role"] for each in result["issues_roles"]):
                    result["issues_roles"].append(issues)

            for authorization in definition.get("authorization") or []:
                if authorization not in result["issues_authorization"]:
                    result["issues_authorization"].append(authorization)

        return result

    async def save_role(self, recipient: str, grantor: str, role_data: dict[str, Any]) -> None:
        """Set (or overwrite) role_data["role"] of recipient as granted by grantor"""
        await self.storage.save_trust_network_role(recipient, grantor, role_data)
        logger.debug(
            f"trust-network: {sanitize_for_log(grantor)} granted role "
            f"{sanitize_for_log(role_data['role'])} to {sanitize_for_log(recipient)}"
        )

    async def index(self, transaction: Transaction) -> None:
        """Grant or revoke roles carried by an association transaction"""
        party = transaction.counterparty
        if not transaction.sender or not party or transaction.association_type is None:
            return

        if transaction.type == ASSOCIATION_INVOKE_TYPE:
            sender_roles = await self.get_roles(transaction.sender)
            for issues in sender_roles["issues_roles"]:
                if issues.get("type") == transaction.association_type:
                    await self.save_role(party, transaction.sender, issues)

        elif transaction.type == ASSOCIATION_REVOKE_TYPE:
            removed = await self.storage.remove_trust_network_roles(
                party, transaction.sender, transaction.association_type
            )
            if removed:
                logger.debug(
                    f"trust-network: {sanitize_for_log(transaction.sender)} revoked "
                    f"{sanitize_for_log(removed)} from {sanitize_for_log(party)}"
                )

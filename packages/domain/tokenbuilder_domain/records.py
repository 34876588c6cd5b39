"""Persisted token records and version history entries.

The token store itself is external. This module only maps between the stored
shape and TokenSpecification, and builds the rows a caller writes when a
token design is saved:

- the token row: specification, latest generated contract text, status
- an append-only version entry: {token_id, version_number, spec snapshot}

Version numbers are allocated by the caller (typically last version + 1 read
from the store); nothing here invents one.

Stored shape (camelCase, as written by the token builder):

    {
        "name": "CreditLinkedNote2025", "symbol": "CLN", "decimals": 0,
        "standard": "ERC-3525", "totalSupply": 1000000,
        "blocks": {"compliance": [...], "features": [...], "governance": [...]},
        "metadata": {
            "description": "", "category": "", "product": "",
            "issuanceDate": "2025-01-01", "maturityDate": "2030-01-01",
            "tranches": [{"id": 1, "name": "Senior (AAA)", "value": 700000, "interestRate": 3}],
            "whitelistEnabled": true, "jurisdictionRestrictions": ["US"],
            "conversionRate": 100
        }
    }

Tranche interest rates are stored as percentages and converted to basis
points on load.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from pydantic import Field

from .schemas import (
    DomainModel,
    ContractDraft,
    TokenSpecification,
    BuildingBlocks,
    TokenMetadata,
    Tranche,
    TokenId,
    ProjectId,
    TokenStatus,
    DEFAULT_TOTAL_SUPPLY,
)
from .contracts import FragmentComposer, to_basis_points

logger = logging.getLogger(__name__)


class IncompleteSpecificationError(ValueError):
    """Raised when a token is saved without its required fields."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Token specification is missing required fields: {self.missing_fields}")


# =============================================================================
# Records
# =============================================================================

class TokenRecord(DomainModel):
    """A token row as kept by the external store."""

    id: TokenId
    project_id: ProjectId
    spec: TokenSpecification
    contract_preview: str = Field(default="", description="Latest generated contract text")
    status: TokenStatus = "DRAFT"
    created_at: datetime
    updated_at: datetime


class TokenVersion(DomainModel):
    """Append-only history entry written on every save."""

    token_id: TokenId
    version_number: int = Field(ge=1, description="Allocated by the caller")
    data: Dict[str, Any] = Field(description="Specification snapshot in stored shape")
    created_at: datetime


@dataclass(frozen=True)
class TokenSave:
    """Everything a caller persists for one save."""

    record: TokenRecord
    version: TokenVersion
    draft: ContractDraft


# =============================================================================
# Stored shape mapping
# =============================================================================

def _tranche_from_record(data: Mapping[str, Any]) -> Tranche:
    if "interestRateBasisPoints" in data:
        rate_bps = int(data["interestRateBasisPoints"])
    else:
        rate_bps = to_basis_points(data.get("interestRate") or 0)
    return Tranche(
        id=data["id"],
        name=data.get("name") or "",
        value=data.get("value") or 0,
        interest_rate_bps=rate_bps,
    )


def spec_from_record(record: Mapping[str, Any]) -> TokenSpecification:
    """Load a TokenSpecification from the stored token shape.

    Missing sections fall back to defaults; blank dates load as absent.

    Raises:
        pydantic.ValidationError: If a field is structurally invalid
            (e.g. decimals outside [0, 18])
    """
    blocks = record.get("blocks") or {}
    metadata = record.get("metadata") or {}
    total_supply = record.get("totalSupply", metadata.get("totalSupply"))

    return TokenSpecification(
        name=record.get("name") or "",
        symbol=record.get("symbol") or "",
        decimals=record.get("decimals", 18),
        standard=record.get("standard") or "ERC-20",
        total_supply=DEFAULT_TOTAL_SUPPLY if total_supply is None else total_supply,
        blocks=BuildingBlocks(
            compliance=blocks.get("compliance") or (),
            features=blocks.get("features") or (),
            governance=blocks.get("governance") or (),
        ),
        metadata=TokenMetadata(
            description=metadata.get("description") or "",
            category=metadata.get("category") or "",
            product=metadata.get("product") or "",
            issuance_date=metadata.get("issuanceDate") or None,
            maturity_date=metadata.get("maturityDate") or None,
            tranches=tuple(_tranche_from_record(t) for t in metadata.get("tranches") or ()),
            whitelist_enabled=metadata.get("whitelistEnabled") is not False,
            jurisdiction_restrictions=metadata.get("jurisdictionRestrictions") or (),
            conversion_rate=metadata.get("conversionRate") or None,
        ),
    )


def spec_to_record(spec: TokenSpecification) -> Dict[str, Any]:
    """Stored shape of a specification (inverse of spec_from_record)."""
    metadata = spec.metadata
    return {
        "name": spec.name,
        "symbol": spec.symbol,
        "decimals": spec.decimals,
        "standard": spec.standard,
        "totalSupply": spec.total_supply,
        "blocks": {
            "compliance": list(spec.blocks.compliance),
            "features": list(spec.blocks.features),
            "governance": list(spec.blocks.governance),
        },
        "metadata": {
            "description": metadata.description,
            "category": metadata.category,
            "product": metadata.product,
            "issuanceDate": metadata.issuance_date.isoformat() if metadata.issuance_date else "",
            "maturityDate": metadata.maturity_date.isoformat() if metadata.maturity_date else "",
            "tranches": [
                {
                    "id": tranche.id,
                    "name": tranche.name,
                    "value": tranche.value,
                    "interestRate": tranche.interest_rate_bps / 100,
                    "interestRateBasisPoints": tranche.interest_rate_bps,
                }
                for tranche in metadata.tranches
            ],
            "whitelistEnabled": metadata.whitelist_enabled,
            "jurisdictionRestrictions": list(metadata.jurisdiction_restrictions),
            "conversionRate": metadata.conversion_rate or 0,
        },
    }


# =============================================================================
# Save
# =============================================================================

def missing_required_fields(spec: TokenSpecification) -> List[str]:
    return [
        field_name for field_name in ("name", "symbol", "standard")
        if not getattr(spec, field_name).strip()
    ]


def prepare_token_save(
    spec: TokenSpecification,
    *,
    token_id: str,
    project_id: str,
    version_number: int,
    saved_at: datetime,
    existing: Optional[TokenRecord] = None,
    composer: Optional[FragmentComposer] = None,
) -> TokenSave:
    """Build the token row and version entry for a save.

    The contract preview is regenerated from the specification. When an
    existing record is given, its creation time and status are kept.

    Args:
        spec: Specification being saved
        token_id: Id of the token row (new or existing)
        project_id: Owning project
        version_number: Caller-allocated version number for the history entry
        saved_at: Save timestamp
        existing: Current record when updating a token
        composer: Composer to draft with (default registry if omitted)

    Raises:
        IncompleteSpecificationError: If name, symbol or standard is empty
        UnsupportedStandardKind: If the standard is not supported
        DuplicateTrancheIdError: If tranche ids collide
    """
    missing = missing_required_fields(spec)
    if missing:
        raise IncompleteSpecificationError(missing)

    draft = (composer or FragmentComposer()).compose(spec)

    record = TokenRecord(
        id=token_id,
        project_id=project_id,
        spec=spec,
        contract_preview=draft.full_text,
        status=existing.status if existing else "DRAFT",
        created_at=existing.created_at if existing else saved_at,
        updated_at=saved_at,
    )
    version = TokenVersion(
        token_id=token_id,
        version_number=version_number,
        data=spec_to_record(spec),
        created_at=saved_at,
    )

    logger.info(
        f"Prepared save of token {token_id} version {version_number} "
        f"({spec.standard}, {len(draft.included_fragment_ids)} fragments)"
    )
    return TokenSave(record=record, version=version, draft=draft)

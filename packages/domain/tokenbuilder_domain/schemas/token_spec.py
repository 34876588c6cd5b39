"""Token specification models.

A TokenSpecification is the declarative description of a token that the
contract generator consumes. It is built from token-builder form input or
loaded from a persisted token record, and it is immutable: every edit
(toggling a building block, adding or removing a tranche) returns a new
specification.
"""

import re
from datetime import date
from typing import Optional, Tuple
from pydantic import Field, field_validator

from .base import (
    ValueModel,
    BlockCategory,
    TokenDecimals,
    TokenAmount,
    BasisPoints,
    SlotId,
)


DEFAULT_TOTAL_SUPPLY = 1_000_000

BLOCK_CATEGORIES: Tuple[BlockCategory, ...] = ("compliance", "features", "governance")


def normalize_block_name(name: str) -> str:
    """Lookup key for a building block name.

    Example:
        "Accredited Investors Only" -> "accredited_investors_only"
        "multi-sig" -> "multi_sig"
    """
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


def _dedupe(values) -> Tuple[str, ...]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return tuple(result)


# =============================================================================
# Building Blocks
# =============================================================================

class BuildingBlocks(ValueModel):
    """Independently toggleable modules, grouped by category.

    Names are stored as entered (display names like "KYC" or catalog ids like
    "kyc"); duplicates are dropped with first-seen order preserved.
    """

    compliance: Tuple[str, ...] = Field(default=(), description="Compliance modules (KYC, AML, ...)")
    features: Tuple[str, ...] = Field(default=(), description="Feature modules (Dividends, Voting, ...)")
    governance: Tuple[str, ...] = Field(default=(), description="Governance modules (Issuer Control, ...)")

    @field_validator("compliance", "features", "governance", mode="after")
    @classmethod
    def drop_duplicates(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return _dedupe(name.strip() for name in value if name and name.strip())

    def names(self, category: BlockCategory) -> Tuple[str, ...]:
        return getattr(self, category)

    def keys(self, category: BlockCategory) -> frozenset:
        """Normalized names present in a category."""
        return frozenset(normalize_block_name(name) for name in self.names(category))

    def contains(self, category: BlockCategory, name: str) -> bool:
        return normalize_block_name(name) in self.keys(category)

    def is_empty(self) -> bool:
        return not (self.compliance or self.features or self.governance)

    def toggled(self, category: BlockCategory, name: str) -> "BuildingBlocks":
        """Return a copy with ``name`` added to, or removed from, ``category``.

        Blank names are ignored.
        """
        name = (name or "").strip()
        key = normalize_block_name(name)
        if not key:
            return self
        current = self.names(category)
        if key in self.keys(category):
            updated = tuple(n for n in current if normalize_block_name(n) != key)
        else:
            updated = current + (name,)
        return self.replaced(**{category: updated})


# =============================================================================
# Tranches
# =============================================================================

class Tranche(ValueModel):
    """A named slice of a structured product's total value.

    Each tranche seeds one slot initialization statement in slot-based token
    standards (ERC-3525). The id is the slot key and therefore stable: it is
    never reassigned when other tranches are removed.

    Example:
        Tranche(id=1, name="Senior (AAA)", value=700000, interest_rate_bps=300)
    """

    id: SlotId
    name: str = Field(default="", description="Display name, e.g. 'Senior (AAA)'")
    value: TokenAmount = Field(default=0, description="Value allocated to this tranche")
    interest_rate_bps: BasisPoints = Field(
        default=0,
        description="Interest rate in basis points (3% = 300)"
    )


def next_tranche_id(tranches) -> int:
    """Next free slot id: max(existing ids) + 1, starting at 1."""
    return max((tranche.id for tranche in tranches), default=0) + 1


# =============================================================================
# Metadata
# =============================================================================

class TokenMetadata(ValueModel):
    """Descriptive and product-level settings of a token.

    Absent optional values (dates, description, conversion rate) are rendered
    with documented defaults by the generator; they never fail generation.
    """

    description: str = ""
    category: str = ""
    product: str = ""

    issuance_date: Optional[date] = Field(
        default=None,
        description="Issuance date. None means 'evaluate at deployment time'."
    )

    maturity_date: Optional[date] = Field(
        default=None,
        description="Maturity date. None means deployment time (block.timestamp) plus the default maturity offset."
    )

    tranches: Tuple[Tranche, ...] = Field(
        default=(),
        description="Ordered tranche definitions (structured products only)"
    )

    whitelist_enabled: bool = True

    jurisdiction_restrictions: Tuple[str, ...] = Field(
        default=(),
        description="Restricted region codes (ISO-style, e.g. 'US', 'CN')"
    )

    conversion_rate: Optional[int] = Field(
        default=None,
        ge=0,
        description="Conversion rate to the fungible representation. None or 0 renders the default."
    )

    @field_validator("issuance_date", "maturity_date", mode="before")
    @classmethod
    def blank_date_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("jurisdiction_restrictions", mode="after")
    @classmethod
    def normalize_regions(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return _dedupe(code.strip().upper() for code in value if code and code.strip())


# =============================================================================
# Token Specification
# =============================================================================

class TokenSpecification(ValueModel):
    """Declarative token specification consumed by the contract generator.

    The specification is transient: it is either collected from the token
    builder form or deserialized from a persisted token record (see
    ``tokenbuilder_domain.records``).

    Soft invariants (reported, never enforced):
        - Sum of tranche values equals total_supply
        - name and symbol are non-empty

    Hard invariants are enforced by field validation (decimals in [0, 18],
    non-negative supply and tranche values). Duplicate tranche ids are
    accepted here and rejected by the composer, which cannot trust upstream
    state.

    Example:
        spec = TokenSpecification(
            name="Credit Linked Note 2025",
            symbol="CLN",
            decimals=0,
            standard="ERC-3525",
            blocks=BuildingBlocks(compliance=("KYC",), features=("Tranche Structure",)),
            metadata=TokenMetadata(tranches=(
                Tranche(id=1, name="Senior (AAA)", value=700000, interest_rate_bps=300),
            )),
        )
        spec = spec.with_tranche_added(name="Mezzanine (BBB)", value=200000, interest_rate_bps=500)
    """

    name: str = ""
    symbol: str = ""
    decimals: TokenDecimals = 18
    standard: str = Field(default="ERC-20", description="Token standard, e.g. 'ERC-20'")
    total_supply: TokenAmount = DEFAULT_TOTAL_SUPPLY
    blocks: BuildingBlocks = Field(default_factory=BuildingBlocks)
    metadata: TokenMetadata = Field(default_factory=TokenMetadata)

    @field_validator("standard", mode="after")
    @classmethod
    def strip_standard(cls, value: str) -> str:
        return value.strip()

    @property
    def tranches(self) -> Tuple[Tranche, ...]:
        return self.metadata.tranches

    @property
    def tranche_total(self) -> int:
        return sum(tranche.value for tranche in self.tranches)

    def has_block(self, category: BlockCategory, name: str) -> bool:
        return self.blocks.contains(category, name)

    # -------------------------------------------------------------------------
    # Edits (return new specifications)
    # -------------------------------------------------------------------------

    def with_block_toggled(self, category: BlockCategory, name: str) -> "TokenSpecification":
        return self.replaced(blocks=self.blocks.toggled(category, name))

    def with_tranches(self, tranches) -> "TokenSpecification":
        return self.replaced(metadata=self.metadata.replaced(tranches=tuple(tranches)))

    def with_tranche_added(
        self,
        name: Optional[str] = None,
        value: int = 0,
        interest_rate_bps: int = 0,
    ) -> "TokenSpecification":
        """Append a tranche with id = max(existing ids) + 1."""
        new_id = next_tranche_id(self.tranches)
        tranche = Tranche(
            id=new_id,
            name=name if name is not None else f"Tranche {new_id}",
            value=value,
            interest_rate_bps=interest_rate_bps,
        )
        return self.with_tranches(self.tranches + (tranche,))

    def without_tranche(self, tranche_id: int) -> "TokenSpecification":
        """Remove a tranche by id. Remaining ids are left untouched."""
        return self.with_tranches(t for t in self.tranches if t.id != tranche_id)

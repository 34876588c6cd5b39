"""Base classes and type system for token design models.

This module provides the foundational types and base classes used throughout
the token schema system.
"""

from typing import Annotated, Literal
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Models
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment for runtime safety
    - Enum value serialization
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )


class ValueModel(DomainModel):
    """Immutable domain model.

    Token specifications and generated drafts are values: they are never
    mutated in place. Edits produce a new instance via ``replaced``.
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    def replaced(self, **changes):
        """Copy with ``changes`` applied. Unlike ``model_copy`` the result is validated."""
        return type(self).model_validate({**self.model_dump(), **changes})


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

TokenDecimals = Annotated[
    int,
    Field(ge=0, le=18, description="Decimal places of the token (0 to 18)")
]

TokenAmount = Annotated[
    int,
    Field(ge=0, description="Whole token units (non-negative)")
]

BasisPoints = Annotated[
    int,
    Field(ge=0, description="Rate in basis points (1% = 100)")
]


# =============================================================================
# ID Conventions
# =============================================================================

SlotId = Annotated[
    int,
    Field(
        ge=1,
        description="Tranche slot identifier. Stable across edits, never renumbered."
    )
]

TokenId = Annotated[
    str,
    Field(
        min_length=1,
        description="Identifier of a persisted token row (UUID or store-assigned)"
    )
]

ProjectId = Annotated[
    str,
    Field(
        min_length=1,
        description="Identifier of the owning cap table project"
    )
]


# =============================================================================
# Enumerations
# =============================================================================

BlockCategory = Literal["compliance", "features", "governance"]

TokenStatus = Literal["DRAFT", "READY_TO_MINT", "MINTED"]

WarningCode = Literal["tranche_sum_mismatch", "missing_name", "missing_symbol"]


# =============================================================================
# Conventions
# =============================================================================
#
# Standards:
#   - Stored as the display value, e.g. "ERC-20", "ERC-3525".
#   - The specification accepts any string so that stored records for retired
#     standards still load; the template registry decides what is supported.
#
# Building block names:
#   - Matched case-insensitively on a normalized key, so "Accredited Investors
#     Only" and "accredited_investors_only" refer to the same block.
#
# Slot IDs:
#   - 1, 2, 3 ... allocated as max(existing) + 1.
#   - Deleting a tranche leaves gaps; the ids double as on-chain slot keys.
#
# =============================================================================

"""Token design schemas.

This package contains all Pydantic models for the token design domain layer:
- Base types and conventions
- Token specifications (building blocks, metadata, tranches)
- Generated contract drafts and validation warnings
- Generator and workbook configuration
- Catalog of standards, building blocks, and templates

Usage:
    from tokenbuilder_domain.schemas import (
        TokenSpecification, BuildingBlocks, TokenMetadata, Tranche,
        ContractDraft, GeneratorCFG, TokenWorkbookCFG
    )
"""

# Base types
from .base import (
    DomainModel,
    ValueModel,
    TokenDecimals,
    TokenAmount,
    BasisPoints,
    SlotId,
    TokenId,
    ProjectId,
    BlockCategory,
    TokenStatus,
    WarningCode,
)

# Specifications
from .token_spec import (
    TokenSpecification,
    BuildingBlocks,
    TokenMetadata,
    Tranche,
    BLOCK_CATEGORIES,
    DEFAULT_TOTAL_SUPPLY,
    next_tranche_id,
    normalize_block_name,
)

# Drafts
from .draft import (
    ContractDraft,
    BodyFragment,
    ValidationWarning,
    TrancheSumCheck,
)

# Configuration
from .generator import GeneratorCFG
from .workbook import TokenWorkbookCFG

# Catalog
from .catalog import (
    TOKEN_STANDARDS,
    SLOT_STANDARDS,
    PRODUCT_CATEGORIES,
    BUILDING_BLOCKS,
    TOKEN_TEMPLATES,
    DEFAULT_TRANCHES,
    BuildingBlockOption,
    TokenTemplate,
    get_template,
    find_templates,
    spec_from_template,
)

__all__ = [
    # Base types
    "DomainModel",
    "ValueModel",
    "TokenDecimals",
    "TokenAmount",
    "BasisPoints",
    "SlotId",
    "TokenId",
    "ProjectId",
    "BlockCategory",
    "TokenStatus",
    "WarningCode",
    # Specifications
    "TokenSpecification",
    "BuildingBlocks",
    "TokenMetadata",
    "Tranche",
    "BLOCK_CATEGORIES",
    "DEFAULT_TOTAL_SUPPLY",
    "next_tranche_id",
    "normalize_block_name",
    # Drafts
    "ContractDraft",
    "BodyFragment",
    "ValidationWarning",
    "TrancheSumCheck",
    # Configuration
    "GeneratorCFG",
    "TokenWorkbookCFG",
    # Catalog
    "TOKEN_STANDARDS",
    "SLOT_STANDARDS",
    "PRODUCT_CATEGORIES",
    "BUILDING_BLOCKS",
    "TOKEN_TEMPLATES",
    "DEFAULT_TRANCHES",
    "BuildingBlockOption",
    "TokenTemplate",
    "get_template",
    "find_templates",
    "spec_from_template",
]

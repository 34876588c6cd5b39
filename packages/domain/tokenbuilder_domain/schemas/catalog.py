"""Token builder catalog: standards, product categories, building blocks, templates.

The catalog is what the token-design workflow offers to choose from. A
template pre-selects a standard and a set of building blocks for a product;
``spec_from_template`` turns it into a starting TokenSpecification.
"""

from datetime import date
from typing import Dict, List, Tuple
from pydantic import Field

from .base import ValueModel, BlockCategory
from .token_spec import (
    BuildingBlocks,
    TokenMetadata,
    TokenSpecification,
    Tranche,
    DEFAULT_TOTAL_SUPPLY,
)


# =============================================================================
# Standards and Products
# =============================================================================

TOKEN_STANDARDS: Dict[str, str] = {
    "ERC-20": "ERC-20 (Fungible Token)",
    "ERC-721": "ERC-721 (Non-Fungible Token)",
    "ERC-1155": "ERC-1155 (Multi Token)",
    "ERC-1400": "ERC-1400 (Security Token)",
    "ERC-3525": "ERC-3525 (Semi-Fungible Token)",
    "ERC-4626": "ERC-4626 (Tokenized Vault)",
}

# Standards that carry per-slot tranche initialization
SLOT_STANDARDS = frozenset({"ERC-3525"})

PRODUCT_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "Traditional Assets": (
        "Structured Products",
        "Equity",
        "Commodities",
        "Funds, ETFs, ETPs",
        "Bonds",
        "Quantitative Investment Strategies",
    ),
    "Alternative Assets": (
        "Private Equity",
        "Private Debt",
        "Real Estate",
        "Energy",
        "Infrastructure",
        "Collectibles & all other assets",
    ),
    "Digital Assets": (
        "Digital Tokenised Fund",
    ),
}


# =============================================================================
# Building Blocks
# =============================================================================

class BuildingBlockOption(ValueModel):
    """A selectable building block shown in the token builder."""

    id: str = Field(pattern=r'^[a-z][a-z0-9_]*$')
    name: str
    description: str


BUILDING_BLOCKS: Dict[BlockCategory, Tuple[BuildingBlockOption, ...]] = {
    "compliance": (
        BuildingBlockOption(id="kyc", name="KYC", description="Know Your Customer verification"),
        BuildingBlockOption(id="aml", name="AML", description="Anti-Money Laundering checks"),
        BuildingBlockOption(
            id="accredited",
            name="Accredited Investors Only",
            description="Restrict to accredited/qualified investors",
        ),
        BuildingBlockOption(
            id="jurisdiction",
            name="Jurisdiction Restrictions",
            description="Restrict based on investor jurisdiction",
        ),
        BuildingBlockOption(
            id="max_investors",
            name="Maximum Investors",
            description="Limit the total number of investors",
        ),
    ),
    "features": (
        BuildingBlockOption(id="voting", name="Voting", description="Enable governance voting rights"),
        BuildingBlockOption(id="dividends", name="Dividends", description="Enable dividend/distribution payments"),
        BuildingBlockOption(
            id="transfer_restrictions",
            name="Transfer Restrictions",
            description="Restrict token transfers based on rules",
        ),
        BuildingBlockOption(
            id="redemption",
            name="Redemption Rights",
            description="Allow token redemption under specific conditions",
        ),
        BuildingBlockOption(id="lockup", name="Lockup Period", description="Enforce token lockup periods"),
        BuildingBlockOption(id="vesting", name="Vesting Schedule", description="Implement token vesting schedules"),
    ),
    "governance": (
        BuildingBlockOption(
            id="issuer_control",
            name="Issuer Control",
            description="Issuer maintains full control over token",
        ),
        BuildingBlockOption(
            id="board_approval",
            name="Board Approval",
            description="Require board approval for certain actions",
        ),
        BuildingBlockOption(id="dao", name="DAO Governance", description="Decentralized Autonomous Organization governance"),
        BuildingBlockOption(
            id="multi_sig",
            name="Multi-Signature",
            description="Require multiple signatures for key actions",
        ),
    ),
}


# =============================================================================
# Templates
# =============================================================================

class TokenTemplate(ValueModel):
    """Preset standard and building blocks for a product."""

    name: str
    description: str
    category: str = Field(description="Product this template is offered for (e.g. 'Bonds')")
    standard: str
    default_blocks: BuildingBlocks

    @property
    def has_default_tranches(self) -> bool:
        return "Structured Product" in self.name or "Credit Linked" in self.name


TOKEN_TEMPLATES: Tuple[TokenTemplate, ...] = (
    TokenTemplate(
        name="Equity Token",
        description="Standard equity token with voting rights and dividends",
        category="Equity",
        standard="ERC-1400",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML", "Accredited Investors Only"),
            features=("Voting", "Dividends", "Transfer Restrictions"),
            governance=("Board Approval",),
        ),
    ),
    TokenTemplate(
        name="Real Estate Token",
        description="Token representing fractional ownership of real estate",
        category="Real Estate",
        standard="ERC-1400",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML", "Accredited Investors Only"),
            features=("Rental Income", "Transfer Restrictions", "Redemption Rights"),
            governance=("Manager Approval",),
        ),
    ),
    TokenTemplate(
        name="Bond Token",
        description="Fixed income security with regular coupon payments",
        category="Bonds",
        standard="ERC-20",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML"),
            features=("Fixed Interest", "Maturity Date", "Early Redemption"),
            governance=("Issuer Control",),
        ),
    ),
    TokenTemplate(
        name="Fund Token",
        description="Token representing shares in an investment fund",
        category="Funds, ETFs, ETPs",
        standard="ERC-4626",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML", "Investor Qualification"),
            features=("NAV Calculation", "Redemption Windows", "Management Fee"),
            governance=("Fund Manager Control",),
        ),
    ),
    TokenTemplate(
        name="Structured Product Token",
        description="Complex financial product with conditional returns and multiple tranches",
        category="Structured Products",
        standard="ERC-3525",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML", "Sophisticated Investors Only", "Jurisdiction Restrictions"),
            features=(
                "Conditional Returns",
                "Barrier Levels",
                "Underlying Asset Linkage",
                "Tranche Structure",
                "Maturity Date",
            ),
            governance=("Issuer Control",),
        ),
    ),
    TokenTemplate(
        name="Credit Linked Note",
        description="Structured product linked to credit performance of underlying assets",
        category="Structured Products",
        standard="ERC-3525",
        default_blocks=BuildingBlocks(
            compliance=("KYC", "AML", "Accredited Investors Only", "Jurisdiction Restrictions"),
            features=("Tranche Structure", "Interest Rate", "Maturity Date", "Credit Event Triggers"),
            governance=("Issuer Control",),
        ),
    ),
)

DEFAULT_TRANCHES: Tuple[Tranche, ...] = (
    Tranche(id=1, name="Senior (AAA)", value=700000, interest_rate_bps=300),
    Tranche(id=2, name="Mezzanine (BBB)", value=200000, interest_rate_bps=500),
    Tranche(id=3, name="Junior (CCC)", value=100000, interest_rate_bps=800),
)

DEFAULT_TERM_YEARS = 5


def get_template(name: str) -> TokenTemplate:
    """Look up a template by name.

    Raises:
        KeyError: If no template has this name
    """
    for template in TOKEN_TEMPLATES:
        if template.name == name:
            return template
    raise KeyError(f"Template '{name}' not found. Available: {[t.name for t in TOKEN_TEMPLATES]}")


def find_templates(product: str) -> List[TokenTemplate]:
    """Templates offered for a product (e.g. 'Structured Products')."""
    return [template for template in TOKEN_TEMPLATES if template.category == product]


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year + years, day=28)


def spec_from_template(template: TokenTemplate, today: date) -> TokenSpecification:
    """Starting specification for a template.

    Defaults:
        - decimals: 0 for slot-based standards (structured products), else 18
        - total_supply: 1,000,000
        - issuance: today; maturity: today + 5 years
        - conversion_rate: 100
        - three default tranches for structured products and credit linked notes
        - name/symbol "CreditLinkedNote2025"/"CLN" for the Credit Linked Note template

    Args:
        template: Template to start from
        today: Issuance date (passed in so the result stays deterministic)
    """
    is_cln = template.name == "Credit Linked Note"
    return TokenSpecification(
        name="CreditLinkedNote2025" if is_cln else "",
        symbol="CLN" if is_cln else "",
        decimals=0 if template.standard in SLOT_STANDARDS else 18,
        standard=template.standard,
        total_supply=DEFAULT_TOTAL_SUPPLY,
        blocks=template.default_blocks,
        metadata=TokenMetadata(
            category=template.category,
            product=template.name,
            issuance_date=today,
            maturity_date=_add_years(today, DEFAULT_TERM_YEARS),
            tranches=DEFAULT_TRANCHES if template.has_default_tranches else (),
            whitelist_enabled=True,
            conversion_rate=100,
        ),
    )

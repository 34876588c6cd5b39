"""Workbook configuration - top-level entry point for Excel export.

The TokenWorkbookCFG ties together a token specification, the generator
configuration used to draft its contract, and display options (which sheets
to include). This is what gets passed to the Excel renderer.
"""

from pydantic import Field

from .base import DomainModel
from .generator import GeneratorCFG
from .token_spec import TokenSpecification


class TokenWorkbookCFG(DomainModel):
    """Configuration for exporting a token design to a workbook.

    Sheets:
        - Token Design: overview, building blocks, tranche table (always)
        - Contract: generated draft, one source line per row (optional)
        - Fragments: included fragments and their triggers (optional)

    Example:
        cfg = TokenWorkbookCFG(spec=spec, include_fragments_sheet=False)
        TokenSheetRenderer(cfg).render("token.xlsx")
    """

    spec: TokenSpecification

    generator: GeneratorCFG = Field(
        default_factory=GeneratorCFG,
        description="Generator configuration used to draft the contract"
    )

    include_contract_sheet: bool = Field(
        default=True,
        description="Write the generated contract text to a 'Contract' sheet"
    )

    include_fragments_sheet: bool = Field(
        default=True,
        description="Write included fragment annotations to a 'Fragments' sheet"
    )

    design_sheet_title: str = Field(
        default="Token Design",
        min_length=1,
        max_length=31,
        description="Title of the main sheet (Excel limits titles to 31 characters)"
    )

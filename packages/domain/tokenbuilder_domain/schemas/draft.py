"""Generated contract draft models.

A ContractDraft is produced fresh by every generation request and never
mutated afterwards. Besides the final text it keeps the individual pieces
(header, constructor, body fragments, tranche section, footer) and the ids of
the fragments that were included, so callers can annotate what was generated
and why.
"""

from typing import Tuple
from pydantic import Field

from .base import ValueModel, BlockCategory, WarningCode


class BodyFragment(ValueModel):
    """One rendered fragment of the contract body."""

    fragment_id: str = Field(description="Id of the rule that produced this fragment")
    category: BlockCategory
    text: str


class ValidationWarning(ValueModel):
    """Non-fatal finding about a specification.

    Warnings are returned alongside a draft and never raised. A tranche sum
    that differs from the total supply is the typical case.
    """

    code: WarningCode
    message: str


class TrancheSumCheck(ValueModel):
    """Result of comparing tranche values against total supply.

    Example:
        tranche values 700000 + 200000 against total_supply 1000000
        -> TrancheSumCheck(tranche_total=900000, total_supply=1000000,
                           difference=-100000, matches=False)
    """

    tranche_total: int
    total_supply: int

    @property
    def difference(self) -> int:
        return self.tranche_total - self.total_supply

    @property
    def matches(self) -> bool:
        return self.difference == 0


class ContractDraft(ValueModel):
    """Draft source text for a token contract plus what went into it.

    full_text is always the concatenation, in order, of:
        header_text + constructor_text + body fragments + tranche_text + footer_text
    """

    standard: str
    header_text: str
    constructor_text: str
    body_fragments: Tuple[BodyFragment, ...] = ()
    tranche_statements: Tuple[str, ...] = ()
    tranche_text: str = ""
    footer_text: str
    full_text: str
    included_fragment_ids: Tuple[str, ...] = ()
    warnings: Tuple[ValidationWarning, ...] = ()

    @property
    def skeleton_text(self) -> str:
        """Standard-specific scaffold, independent of selected building blocks."""
        return self.header_text + self.constructor_text + self.footer_text

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def tranche_sum_matches(self) -> bool:
        return not any(w.code == "tranche_sum_mismatch" for w in self.warnings)

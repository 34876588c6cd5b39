"""Soft invariant checks for token specifications.

Nothing here raises: findings are returned as ValidationWarning values so the
caller decides whether to surface, ignore, or block on them.
"""

from typing import Tuple

from ..schemas import (
    TokenSpecification,
    TrancheSumCheck,
    ValidationWarning,
    SLOT_STANDARDS,
)


def check_tranche_sum(spec: TokenSpecification) -> TrancheSumCheck:
    """Compare the sum of tranche values with the total supply."""
    return TrancheSumCheck(tranche_total=spec.tranche_total, total_supply=spec.total_supply)


def collect_warnings(spec: TokenSpecification) -> Tuple[ValidationWarning, ...]:
    """All non-fatal findings for a specification, in a fixed order.

    The tranche sum is only checked for slot-based standards that define at
    least one tranche; other standards do not use tranches.
    """
    warnings = []

    if not spec.name.strip():
        warnings.append(ValidationWarning(
            code="missing_name",
            message="Token name is empty; the contract name falls back to a placeholder.",
        ))

    if not spec.symbol.strip():
        warnings.append(ValidationWarning(
            code="missing_symbol",
            message="Token symbol is empty.",
        ))

    if spec.standard in SLOT_STANDARDS and spec.tranches:
        check = check_tranche_sum(spec)
        if not check.matches:
            warnings.append(ValidationWarning(
                code="tranche_sum_mismatch",
                message=(
                    f"Tranche values sum to {check.tranche_total:,} "
                    f"but total supply is {check.total_supply:,} "
                    f"(difference {check.difference:+,})."
                ),
            ))

    return tuple(warnings)

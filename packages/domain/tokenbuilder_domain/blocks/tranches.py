"""Tranche schedule computation block.

Output DataFrames:
- tranche_schedule: one row per tranche, ordered by slot id
- tranche_summary: single row comparing tranche values with total supply
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..contracts import check_tranche_sum
from ..schemas import TokenSpecification


SCHEDULE_COLUMNS = [
    "slot_id",
    "name",
    "value",
    "interest_rate_bps",
    "interest_rate_pct",
    "share_of_supply_pct",
]


class TrancheScheduleBlock(Block):
    """Tabulates the tranches of a TokenSpecification.

    Inputs (from context):
        - token_specification: TokenSpecification

    Outputs (to context):
        - tranche_schedule: DataFrame with columns:
            * slot_id: Tranche id (slot key)
            * name: Tranche name
            * value: Tranche value in token units
            * interest_rate_bps: Rate in basis points
            * interest_rate_pct: Rate as a percentage (bps / 100)
            * share_of_supply_pct: value / total_supply * 100 (0.0 when supply is 0)

        - tranche_summary: DataFrame with single row:
            * tranche_count, tranche_total, total_supply, difference, matches

    Tranches are tabulated for every standard; whether they are used in the
    contract is the composer's decision.
    """

    def __init__(self, spec_key: str = "token_specification"):
        self.spec_key = spec_key

    def inputs(self) -> List[str]:
        return [self.spec_key]

    def outputs(self) -> List[str]:
        return ["tranche_schedule", "tranche_summary"]

    def execute(self, context: BlockContext) -> None:
        spec: TokenSpecification = context.get(self.spec_key)

        context.set("tranche_schedule", self._compute_schedule(spec))
        context.set("tranche_summary", self._compute_summary(spec))

    def _compute_schedule(self, spec: TokenSpecification) -> pd.DataFrame:
        rows = []
        for tranche in spec.tranches:
            share_pct = (
                tranche.value / spec.total_supply * 100
                if spec.total_supply > 0
                else 0.0
            )
            rows.append({
                "slot_id": tranche.id,
                "name": tranche.name,
                "value": tranche.value,
                "interest_rate_bps": tranche.interest_rate_bps,
                "interest_rate_pct": tranche.interest_rate_bps / 100,
                "share_of_supply_pct": share_pct,
            })

        schedule = pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
        return schedule.sort_values("slot_id", kind="stable").reset_index(drop=True)

    def _compute_summary(self, spec: TokenSpecification) -> pd.DataFrame:
        check = check_tranche_sum(spec)
        return pd.DataFrame([{
            "tranche_count": len(spec.tranches),
            "tranche_total": check.tranche_total,
            "total_supply": check.total_supply,
            "difference": check.difference,
            "matches": check.matches,
        }])

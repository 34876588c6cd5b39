"""Contract draft computation block.

Runs the fragment composer over the specification in context and tabulates
which fragments made it into the draft.

Output:
- contract_draft: ContractDraft
- draft_fragments: one row per included fragment, in draft order
"""

from typing import List, Optional
import pandas as pd

from .base import Block, BlockContext
from ..contracts import FragmentComposer
from ..schemas import ContractDraft, TokenSpecification


FRAGMENT_COLUMNS = ["fragment_id", "category", "position", "line_count", "triggers"]


class ContractDraftBlock(Block):
    """Composes the contract draft for a TokenSpecification.

    Inputs (from context):
        - token_specification: TokenSpecification to draft

    Outputs (to context):
        - contract_draft: ContractDraft
        - draft_fragments: DataFrame with columns:
            * fragment_id: Rule id
            * category: compliance / features / governance
            * position: 1-based order in the draft body
            * line_count: Lines of generated text
            * triggers: Block names that can switch the rule on, comma separated

    Example:
        context = BlockContext()
        context.set("token_specification", spec)

        ContractDraftBlock().execute(context)

        draft = context.get("contract_draft")
        fragments_df = context.get("draft_fragments")
    """

    def __init__(
        self,
        spec_key: str = "token_specification",
        composer: Optional[FragmentComposer] = None,
    ):
        self.spec_key = spec_key
        self.composer = composer or FragmentComposer()

    def inputs(self) -> List[str]:
        return [self.spec_key]

    def outputs(self) -> List[str]:
        return ["contract_draft", "draft_fragments"]

    def execute(self, context: BlockContext) -> None:
        spec: TokenSpecification = context.get(self.spec_key)

        draft = self.composer.compose(spec)
        context.set("contract_draft", draft)
        context.set("draft_fragments", self._fragments_frame(draft))

    def _fragments_frame(self, draft: ContractDraft) -> pd.DataFrame:
        triggers = {rule.id: rule.triggers for rule in self.composer.registry.rules}

        rows = [
            {
                "fragment_id": fragment.fragment_id,
                "category": fragment.category,
                "position": position,
                "line_count": len(fragment.text.splitlines()),
                "triggers": ", ".join(triggers.get(fragment.fragment_id, ())),
            }
            for position, fragment in enumerate(draft.body_fragments, start=1)
        ]
        return pd.DataFrame(rows, columns=FRAGMENT_COLUMNS)

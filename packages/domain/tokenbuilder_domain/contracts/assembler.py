"""Final assembly of a contract draft."""

from typing import Sequence

from ..schemas import BodyFragment, ContractDraft, ValidationWarning


class ContractDraftAssembler:
    """Concatenates the rendered pieces into a ContractDraft.

    Order is fixed: header, constructor, body fragments, tranche section,
    footer. The assembler is stateless and persists nothing.
    """

    def assemble(
        self,
        standard: str,
        header_text: str,
        constructor_text: str,
        body_fragments: Sequence[BodyFragment],
        footer_text: str,
        tranche_statements: Sequence[str] = (),
        tranche_text: str = "",
        warnings: Sequence[ValidationWarning] = (),
    ) -> ContractDraft:
        full_text = "".join([
            header_text,
            constructor_text,
            *(fragment.text for fragment in body_fragments),
            tranche_text,
            footer_text,
        ])

        return ContractDraft(
            standard=standard,
            header_text=header_text,
            constructor_text=constructor_text,
            body_fragments=tuple(body_fragments),
            tranche_statements=tuple(tranche_statements),
            tranche_text=tranche_text,
            footer_text=footer_text,
            full_text=full_text,
            included_fragment_ids=tuple(fragment.fragment_id for fragment in body_fragments),
            warnings=tuple(warnings),
        )

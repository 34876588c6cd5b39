"""Fragment composer: TokenSpecification -> ContractDraft.

Composition steps:
1. Resolve the standard's skeleton (unknown standard fails immediately)
2. For slot-based standards, reject duplicate tranche ids
3. Interpolate header and constructor
4. Evaluate every applicable rule in registry order, appending matches
5. Render one initialization statement per tranche, ordered by slot id
6. Collect soft warnings and assemble

``compose`` is a pure function of (specification, registry): identical input
always produces byte-identical text and fragment ids. No state is kept
between calls, so one composer may be shared across threads.
"""

import logging
from collections import Counter
from string import Template
from typing import List, Optional, Tuple

from ..schemas import (
    BodyFragment,
    ContractDraft,
    TokenSpecification,
    Tranche,
    BLOCK_CATEGORIES,
    normalize_block_name,
)
from .assembler import ContractDraftAssembler
from .interpolator import format_list, quote_literal
from .registry import TemplateRegistry, default_registry
from .templates import ANY_BLOCK, skeleton_placeholders
from .validation import collect_warnings

logger = logging.getLogger(__name__)


class DuplicateTrancheIdError(ValueError):
    """Raised when two tranches of a slot-based token share an id."""

    def __init__(self, duplicate_ids):
        self.duplicate_ids = tuple(sorted(duplicate_ids))
        super().__init__(
            f"Duplicate tranche ids: {list(self.duplicate_ids)}. Tranche ids are slot keys and must be unique."
        )


def tranche_statement(tranche: Tranche) -> str:
    """Slot initialization call for one tranche."""
    return (
        f"        _createTranche({tranche.id}, {quote_literal(tranche.name)}, "
        f"{tranche.value}, {tranche.interest_rate_bps});"
    )


def ordered_tranches(spec: TokenSpecification) -> Tuple[Tranche, ...]:
    """Tranches ordered by slot id.

    Raises:
        DuplicateTrancheIdError: If two tranches share an id
    """
    counts = Counter(tranche.id for tranche in spec.tranches)
    duplicates = [tranche_id for tranche_id, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateTrancheIdError(duplicates)
    return tuple(sorted(spec.tranches, key=lambda tranche: tranche.id))


class FragmentComposer:
    """Composes contract drafts from token specifications.

    Example:
        composer = FragmentComposer()
        draft = composer.compose(spec)
        print(draft.full_text)
        print(draft.included_fragment_ids)  # ('kyc', 'dividends', ...)
    """

    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        assembler: Optional[ContractDraftAssembler] = None,
    ):
        self.registry = registry or default_registry()
        self.assembler = assembler or ContractDraftAssembler()

    def compose(self, spec: TokenSpecification) -> ContractDraft:
        """Generate a contract draft.

        Raises:
            UnsupportedStandardKind: If spec.standard is not registered
            DuplicateTrancheIdError: If a slot-based spec has duplicate tranche ids
        """
        skeleton = self.registry.get_base_skeleton(spec.standard)
        rules = self.registry.get_fragment_rules(spec.standard)

        tranches: Tuple[Tranche, ...] = ()
        if skeleton.requires_slot_initialization:
            tranches = ordered_tranches(spec)

        placeholders = skeleton_placeholders(spec, self.registry.config)
        header_text = Template(skeleton.header_template).substitute(placeholders)
        constructor_text = Template(skeleton.constructor_template).substitute(placeholders)
        footer_text = Template(skeleton.footer_template).substitute(placeholders)

        body_fragments: List[BodyFragment] = []
        for rule in rules:
            if rule.predicate(spec):
                body_fragments.append(BodyFragment(
                    fragment_id=rule.id,
                    category=rule.category,
                    text=rule.render(spec),
                ))

        self._log_unrecognized_blocks(spec)

        tranche_statements = tuple(tranche_statement(tranche) for tranche in tranches)
        tranche_text = ""
        if tranche_statements:
            tranche_text = Template(skeleton.tranche_template).substitute(
                statements=format_list(tranche_statements, str)
            )

        warnings = collect_warnings(spec)

        draft = self.assembler.assemble(
            standard=spec.standard,
            header_text=header_text,
            constructor_text=constructor_text,
            body_fragments=body_fragments,
            footer_text=footer_text,
            tranche_statements=tranche_statements,
            tranche_text=tranche_text,
            warnings=warnings,
        )

        logger.debug(
            f"Composed {spec.standard} draft for '{spec.name}': "
            f"{len(body_fragments)} fragments, {len(tranche_statements)} tranches, "
            f"{len(warnings)} warnings"
        )
        return draft

    def _log_unrecognized_blocks(self, spec: TokenSpecification) -> None:
        """Block names no rule of this standard reacts to are ignored, not errors."""
        recognized = self.registry.recognized_blocks(spec.standard)
        for category in BLOCK_CATEGORIES:
            known = recognized.get(category, frozenset())
            if ANY_BLOCK in known:
                continue
            ignored = [
                name for name in spec.blocks.names(category)
                if normalize_block_name(name) not in known
            ]
            if ignored:
                logger.debug(f"Ignoring {category} blocks without a {spec.standard} rule: {ignored}")


def compose(spec: TokenSpecification, registry: Optional[TemplateRegistry] = None) -> ContractDraft:
    """Generate a contract draft with a default composer."""
    return FragmentComposer(registry=registry).compose(spec)

"""Contract draft generation.

Turns a declarative TokenSpecification into draft contract source text by
composing conditional template fragments.

Architecture:
    TokenSpecification → FragmentComposer → ContractDraft
                             │
                             ├── TemplateRegistry (skeletons + rule table)
                             ├── interpolator (identifiers, dates, basis points, lists)
                             └── ContractDraftAssembler (final concatenation)

Usage:
    from tokenbuilder_domain.contracts import FragmentComposer

    draft = FragmentComposer().compose(spec)
    draft.full_text
    draft.included_fragment_ids
    draft.tranche_sum_matches
"""

from .registry import (
    TemplateRegistry,
    BaseSkeleton,
    FragmentRule,
    UnsupportedStandardKind,
    build_registry,
    default_registry,
)
from .interpolator import (
    NOW_MARKER,
    sanitize_identifier,
    to_epoch_seconds,
    to_basis_points,
    format_list,
    quote_literal,
    supply_expression,
)
from .assembler import ContractDraftAssembler
from .validation import check_tranche_sum, collect_warnings
from .composer import FragmentComposer, DuplicateTrancheIdError, compose

__all__ = [
    "TemplateRegistry",
    "BaseSkeleton",
    "FragmentRule",
    "UnsupportedStandardKind",
    "build_registry",
    "default_registry",
    "NOW_MARKER",
    "sanitize_identifier",
    "to_epoch_seconds",
    "to_basis_points",
    "format_list",
    "quote_literal",
    "supply_expression",
    "ContractDraftAssembler",
    "check_tranche_sum",
    "collect_warnings",
    "FragmentComposer",
    "DuplicateTrancheIdError",
    "compose",
]

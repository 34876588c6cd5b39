"""Computation blocks for token design analysis.

Turns a TokenSpecification into a contract draft and DataFrames suitable for
Excel rendering or other consumption.

Architecture:
    Schemas (data models) → Blocks (computation) → DataFrames (output)

Available blocks:
- ContractDraftBlock: Composes the contract draft and lists its fragments
- TrancheScheduleBlock: Tabulates tranches and checks them against supply

Usage:
    from tokenbuilder_domain.blocks import BlockContext, BlockExecutor, ContractDraftBlock

    context = BlockContext()
    context.set("token_specification", spec)
    BlockExecutor([ContractDraftBlock()]).execute(context)

    fragments_df = context.get("draft_fragments")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError, topological_sort
from .contract_draft import ContractDraftBlock
from .tranches import TrancheScheduleBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "topological_sort",
    "ContractDraftBlock",
    "TrancheScheduleBlock",
]

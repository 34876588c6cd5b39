"""Base classes for token computation blocks.

A block reads named inputs from a shared BlockContext and writes named
outputs back. The executor orders blocks by those declarations, so callers
list blocks in any order:

- BlockContext: key/value store passed between blocks
- Block: abstract unit with declared inputs and outputs
- topological_sort / BlockExecutor: dependency ordering and execution
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Data shared between blocks during one execution.

    Example:
        context = BlockContext()
        context.set("token_specification", spec)

        ContractDraftBlock().execute(context)

        draft = context.get("contract_draft")
        fragments_df = context.get("draft_fragments")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """Abstract base class for computation blocks.

    Subclasses declare what they read (inputs) and write (outputs) and
    implement execute(). Outputs are usually pandas DataFrames for the
    workbook renderer, but any value may be stored.

    Subclass example:
        class SupplyBlock(Block):
            def inputs(self) -> List[str]:
                return ["token_specification"]

            def outputs(self) -> List[str]:
                return ["supply_summary"]

            def execute(self, context: BlockContext) -> None:
                spec = context.get("token_specification")
                context.set("supply_summary", pd.DataFrame([{"total_supply": spec.total_supply}]))
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from context, compute, write outputs to context.

        Raises:
            KeyError: If required inputs not available in context
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks have circular dependencies."""
    pass


def topological_sort(blocks: List[Block]) -> List[Block]:
    """Sort blocks so every producer runs before its consumers.

    Kahn's algorithm; blocks with no pending dependencies keep their
    relative input order.

    Args:
        blocks: Blocks to sort

    Returns:
        Blocks in execution order

    Raises:
        ValueError: If two blocks declare the same output key
        CircularDependencyError: If blocks have circular dependencies

    Example:
        draft_block.outputs() = ["contract_draft", "draft_fragments"]
        report_block.inputs() = ["contract_draft"]

        topological_sort([report_block, draft_block])
        → [draft_block, report_block]
    """
    producers: Dict[str, Block] = {}
    for block in blocks:
        for output_key in block.outputs():
            if output_key in producers:
                raise ValueError(
                    f"Multiple blocks produce '{output_key}': "
                    f"{producers[output_key]} and {block}"
                )
            producers[output_key] = block

    in_degree: Dict[Block, int] = {block: 0 for block in blocks}
    dependents: Dict[Block, List[Block]] = {block: [] for block in blocks}

    for block in blocks:
        for input_key in block.inputs():
            # Inputs without a producer must come from the initial context
            if input_key in producers:
                dependents[producers[input_key]].append(block)
                in_degree[block] += 1

    ready: List[Block] = [block for block in blocks if in_degree[block] == 0]
    ordered: List[Block] = []

    while ready:
        current = ready.pop(0)
        ordered.append(current)
        for dependent in dependents[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                ready.append(dependent)

    if len(ordered) != len(blocks):
        remaining = [block for block in blocks if in_degree[block] > 0]
        raise CircularDependencyError(
            f"Circular dependency detected among blocks: {remaining}"
        )

    return ordered


# =============================================================================
# Block Executor
# =============================================================================

class BlockExecutor:
    """Executes blocks in dependency order.

    Inputs are checked before each block runs and declared outputs after,
    so a misbehaving block fails at its own step rather than downstream.

    Example:
        executor = BlockExecutor([TrancheScheduleBlock(), ContractDraftBlock()])
        context = BlockContext()
        context.set("token_specification", spec)

        executor.execute(context)

        schedule_df = context.get("tranche_schedule")
        draft = context.get("contract_draft")
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._sorted_blocks: Optional[List[Block]] = None

    def execute(self, context: BlockContext) -> BlockContext:
        """Execute all blocks in dependency order.

        Returns:
            The same context, now holding every block output

        Raises:
            CircularDependencyError: If blocks have circular dependencies
            KeyError: If required inputs not available in context
            ValueError: If a block does not write a declared output
        """
        if self._sorted_blocks is None:
            self._sorted_blocks = topological_sort(self.blocks)

        for block in self._sorted_blocks:
            self._validate_inputs(block, context)
            logger.debug(f"Executing {block}")
            block.execute(context)
            self._validate_outputs(block, context)

        return context

    def _validate_inputs(self, block: Block, context: BlockContext) -> None:
        for input_key in block.inputs():
            if not context.has(input_key):
                raise KeyError(
                    f"Block {block} requires input '{input_key}' but it's not in context. "
                    f"Available keys: {context.keys()}"
                )

    def _validate_outputs(self, block: Block, context: BlockContext) -> None:
        for output_key in block.outputs():
            if not context.has(output_key):
                raise ValueError(
                    f"Block {block} declared output '{output_key}' but didn't write it to context"
                )

"""Tests for blocks architecture.

Tests cover:
- BlockContext get/set/has operations
- Block abstract base class
- Topological sort and dependency resolution
- BlockExecutor validation and execution
- ContractDraftBlock and TrancheScheduleBlock outputs
"""

import pytest
from datetime import date

from tokenbuilder_domain.blocks import (
    Block,
    BlockContext,
    BlockExecutor,
    ContractDraftBlock,
    TrancheScheduleBlock,
)
from tokenbuilder_domain.blocks.base import topological_sort, CircularDependencyError
from tokenbuilder_domain.contracts import DuplicateTrancheIdError
from tokenbuilder_domain.schemas import (
    BuildingBlocks,
    TokenMetadata,
    TokenSpecification,
    Tranche,
)


# =============================================================================
# BlockContext Tests
# =============================================================================

def test_block_context_get_set():
    """Test basic get/set operations."""
    context = BlockContext()
    context.set("key1", "value1")
    assert context.get("key1") == "value1"


def test_block_context_has():
    """Test has() method."""
    context = BlockContext()
    assert not context.has("key1")
    context.set("key1", "value1")
    assert context.has("key1")


def test_block_context_keys():
    """Test keys() method."""
    context = BlockContext()
    context.set("key1", "value1")
    context.set("key2", "value2")
    assert set(context.keys()) == {"key1", "key2"}


def test_block_context_get_missing_key():
    """Test that getting missing key raises KeyError."""
    context = BlockContext()
    with pytest.raises(KeyError, match="Key 'missing' not found"):
        context.get("missing")


# =============================================================================
# Topological Sort Tests
# =============================================================================

class SimpleBlock(Block):
    """Simple block for testing."""

    def __init__(self, name, inputs, outputs):
        self.name = name
        self._inputs = inputs
        self._outputs = outputs

    def inputs(self):
        return self._inputs

    def outputs(self):
        return self._outputs

    def execute(self, context):
        for output in self._outputs:
            context.set(output, f"{self.name}_output")

    def __repr__(self):
        return f"SimpleBlock({self.name})"


def test_topological_sort_linear_chain():
    """Test sorting linear dependency chain: A -> B -> C."""
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_b"], ["data_c"])

    sorted_blocks = topological_sort([block_c, block_a, block_b])

    assert sorted_blocks == [block_a, block_b, block_c]


def test_topological_sort_parallel_blocks():
    """Test sorting parallel blocks with shared dependency."""
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_a"], ["data_c"])

    sorted_blocks = topological_sort([block_c, block_b, block_a])

    # A must be first, B and C can be in any order
    assert sorted_blocks[0] == block_a
    assert set(sorted_blocks[1:]) == {block_b, block_c}


def test_topological_sort_circular_dependency():
    """Test that circular dependencies are detected."""
    block_a = SimpleBlock("A", ["data_c"], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_b"], ["data_c"])

    with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
        topological_sort([block_a, block_b, block_c])


def test_topological_sort_duplicate_output():
    """Test that duplicate outputs are detected."""
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", [], ["data_a"])

    with pytest.raises(ValueError, match="Multiple blocks produce"):
        topological_sort([block_a, block_b])


def test_topological_sort_external_inputs():
    """Test blocks with external inputs (not produced by other blocks)."""
    block_a = SimpleBlock("A", ["token_specification"], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])

    sorted_blocks = topological_sort([block_b, block_a])
    assert sorted_blocks == [block_a, block_b]


# =============================================================================
# BlockExecutor Tests
# =============================================================================

def test_block_executor_simple_chain():
    """Test executor with simple linear chain."""
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])

    context = BlockContext()
    executor = BlockExecutor([block_b, block_a])
    executor.execute(context)

    assert context.get("data_a") == "A_output"
    assert context.get("data_b") == "B_output"


def test_block_executor_missing_input():
    """Test that executor validates required inputs."""
    executor = BlockExecutor([ContractDraftBlock()])

    with pytest.raises(KeyError, match="requires input 'token_specification'"):
        executor.execute(BlockContext())


def test_block_executor_missing_output():
    """Test that executor validates block outputs."""

    class BadBlock(Block):
        def inputs(self):
            return []

        def outputs(self):
            return ["output"]

        def execute(self, context):
            pass

    executor = BlockExecutor([BadBlock()])

    with pytest.raises(ValueError, match="declared output 'output' but didn't write"):
        executor.execute(BlockContext())


# =============================================================================
# Token Blocks
# =============================================================================

def build_structured_spec(tranches, total_supply=1_000_000) -> TokenSpecification:
    return TokenSpecification(
        name="Credit Linked Note 2025",
        symbol="CLN",
        decimals=0,
        standard="ERC-3525",
        total_supply=total_supply,
        blocks=BuildingBlocks(
            compliance=("KYC", "AML"),
            features=("Tranche Structure", "Interest Rate"),
            governance=("Issuer Control",),
        ),
        metadata=TokenMetadata(
            issuance_date=date(2025, 1, 1),
            maturity_date=date(2030, 1, 1),
            tranches=tuple(tranches),
        ),
    )


TRANCHES = (
    Tranche(id=3, name="Junior (CCC)", value=100000, interest_rate_bps=800),
    Tranche(id=1, name="Senior (AAA)", value=700000, interest_rate_bps=300),
    Tranche(id=2, name="Mezzanine (BBB)", value=200000, interest_rate_bps=500),
)


def run_blocks(spec, blocks):
    context = BlockContext()
    context.set("token_specification", spec)
    return BlockExecutor(blocks).execute(context)


def test_contract_draft_block():
    context = run_blocks(build_structured_spec(TRANCHES), [ContractDraftBlock()])

    draft = context.get("contract_draft")
    fragments_df = context.get("draft_fragments")

    assert list(fragments_df["fragment_id"]) == list(draft.included_fragment_ids)
    assert list(fragments_df["position"]) == list(range(1, len(draft.included_fragment_ids) + 1))
    assert list(fragments_df.columns) == ["fragment_id", "category", "position", "line_count", "triggers"]

    aml = fragments_df[fragments_df["fragment_id"] == "aml"].iloc[0]
    assert aml["category"] == "compliance"
    assert aml["triggers"] == "aml"
    assert aml["line_count"] > 1


def test_contract_draft_block_empty_blocks():
    spec = TokenSpecification(name="Plain", symbol="PLN")
    context = run_blocks(spec, [ContractDraftBlock()])

    assert context.get("draft_fragments").empty
    assert context.get("contract_draft").included_fragment_ids == ()


def test_contract_draft_block_propagates_duplicate_ids():
    spec = build_structured_spec(TRANCHES + (Tranche(id=1, name="Again"),))
    with pytest.raises(DuplicateTrancheIdError):
        run_blocks(spec, [ContractDraftBlock()])


def test_tranche_schedule_block():
    context = run_blocks(build_structured_spec(TRANCHES), [TrancheScheduleBlock()])

    schedule = context.get("tranche_schedule")
    assert list(schedule["slot_id"]) == [1, 2, 3]
    assert list(schedule["name"]) == ["Senior (AAA)", "Mezzanine (BBB)", "Junior (CCC)"]
    assert list(schedule["interest_rate_pct"]) == [3.0, 5.0, 8.0]
    assert schedule["share_of_supply_pct"].sum() == pytest.approx(100.0)
    assert schedule.iloc[0]["share_of_supply_pct"] == pytest.approx(70.0)

    summary = context.get("tranche_summary").iloc[0]
    assert summary["tranche_count"] == 3
    assert summary["tranche_total"] == 1_000_000
    assert summary["difference"] == 0
    assert bool(summary["matches"])


def test_tranche_schedule_block_mismatch_and_zero_supply():
    spec = build_structured_spec(TRANCHES[:2], total_supply=0)
    context = run_blocks(spec, [TrancheScheduleBlock()])

    schedule = context.get("tranche_schedule")
    assert list(schedule["share_of_supply_pct"]) == [0.0, 0.0]

    summary = context.get("tranche_summary").iloc[0]
    assert summary["tranche_total"] == 800_000
    assert summary["difference"] == 800_000
    assert not bool(summary["matches"])


def test_tranche_schedule_block_without_tranches():
    context = run_blocks(TokenSpecification(name="Plain", symbol="PLN"), [TrancheScheduleBlock()])

    assert context.get("tranche_schedule").empty
    assert context.get("tranche_summary").iloc[0]["tranche_count"] == 0


def test_full_blocks_pipeline():
    """Both token blocks share one specification input."""
    context = run_blocks(
        build_structured_spec(TRANCHES),
        [TrancheScheduleBlock(), ContractDraftBlock()],
    )

    for key in ("contract_draft", "draft_fragments", "tranche_schedule", "tranche_summary"):
        assert context.has(key)

    draft = context.get("contract_draft")
    schedule = context.get("tranche_schedule")
    assert len(draft.tranche_statements) == len(schedule)

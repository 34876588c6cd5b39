"""Tests for the template registry and built-in rule table."""

import pytest

from tokenbuilder_domain.contracts import (
    BaseSkeleton,
    FragmentComposer,
    FragmentRule,
    TemplateRegistry,
    UnsupportedStandardKind,
    build_registry,
    default_registry,
)
from tokenbuilder_domain.schemas import (
    TOKEN_STANDARDS,
    BuildingBlocks,
    GeneratorCFG,
    TokenSpecification,
)


def make_rule(rule_id, standards, precedence, text, category="features"):
    return FragmentRule(
        id=rule_id,
        applies_to_standards=frozenset(standards),
        predicate=lambda spec: True,
        render=lambda spec: text,
        precedence=precedence,
        category=category,
    )


SIMPLE_SKELETON = BaseSkeleton(
    header_template="contract ${contract_name} {\n",
    constructor_template="    // ${name_literal}\n",
    footer_template="}\n",
)


# =============================================================================
# Built-in registry
# =============================================================================

def test_default_registry_covers_catalog_standards():
    registry = default_registry()
    assert set(registry.standards) == set(TOKEN_STANDARDS)


def test_default_registry_is_shared():
    assert default_registry() is default_registry()


def test_rules_sorted_by_precedence():
    registry = default_registry()
    for standard in registry.standards:
        precedences = [rule.precedence for rule in registry.get_fragment_rules(standard)]
        assert precedences == sorted(precedences)


def test_rule_ids_unique():
    ids = [rule.id for rule in default_registry().rules]
    assert len(ids) == len(set(ids))


def test_only_slot_standard_has_tranche_section():
    registry = default_registry()
    assert registry.get_base_skeleton("ERC-3525").requires_slot_initialization
    for standard in ("ERC-20", "ERC-721", "ERC-1155", "ERC-1400", "ERC-4626"):
        assert not registry.get_base_skeleton(standard).requires_slot_initialization


def test_unsupported_standard():
    registry = default_registry()
    assert not registry.supports("ERC-9999")

    with pytest.raises(UnsupportedStandardKind) as excinfo:
        registry.get_base_skeleton("ERC-9999")
    assert excinfo.value.standard == "ERC-9999"
    assert "ERC-20" in excinfo.value.known

    with pytest.raises(UnsupportedStandardKind):
        registry.get_fragment_rules("ERC-9999")


def test_unsupported_standard_is_a_value_error():
    assert issubclass(UnsupportedStandardKind, ValueError)


def test_recognized_blocks():
    recognized = default_registry().recognized_blocks("ERC-20")
    assert "kyc" in recognized["compliance"]
    assert "dividends" in recognized["features"]
    assert "tranche_structure" not in recognized["features"]


# =============================================================================
# Custom registries
# =============================================================================

def test_duplicate_rule_id_rejected():
    with pytest.raises(ValueError, match="registered twice"):
        TemplateRegistry(
            skeletons={"ERC-X": SIMPLE_SKELETON},
            rules=[make_rule("a", {"ERC-X"}, 1, ""), make_rule("a", {"ERC-X"}, 2, "")],
        )


def test_rule_for_unregistered_standard_rejected():
    with pytest.raises(ValueError, match="unregistered standards"):
        TemplateRegistry(
            skeletons={"ERC-X": SIMPLE_SKELETON},
            rules=[make_rule("a", {"ERC-Y"}, 1, "")],
        )


def test_equal_precedence_keeps_registration_order():
    registry = TemplateRegistry(
        skeletons={"ERC-X": SIMPLE_SKELETON},
        rules=[
            make_rule("late", {"ERC-X"}, 20, ""),
            make_rule("second", {"ERC-X"}, 10, ""),
            make_rule("third", {"ERC-X"}, 10, ""),
            make_rule("first", {"ERC-X"}, 5, ""),
        ],
    )
    assert [rule.id for rule in registry.get_fragment_rules("ERC-X")] == [
        "first", "second", "third", "late",
    ]


def test_new_standard_needs_no_composer_change():
    registry = TemplateRegistry(
        skeletons={"ERC-X": SIMPLE_SKELETON},
        rules=[make_rule("hello", {"ERC-X"}, 1, "    // hello\n")],
    )
    spec = TokenSpecification(name="My Token", symbol="MT", standard="ERC-X")

    draft = FragmentComposer(registry=registry).compose(spec)

    assert draft.full_text == 'contract MyToken {\n    // "My Token"\n    // hello\n}\n'
    assert draft.included_fragment_ids == ("hello",)


def test_registry_built_from_config():
    registry = build_registry(GeneratorCFG(pragma="0.8.24", license_identifier="UNLICENSED"))
    spec = TokenSpecification(name="Bond", symbol="BND", blocks=BuildingBlocks(compliance=("KYC",)))

    draft = FragmentComposer(registry=registry).compose(spec)

    assert draft.full_text.startswith("// SPDX-License-Identifier: UNLICENSED\npragma solidity 0.8.24;\n")
    assert registry.config.pragma == "0.8.24"

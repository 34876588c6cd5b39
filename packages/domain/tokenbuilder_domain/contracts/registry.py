"""Template registry: skeletons and fragment rules per token standard.

Each standard contributes a base skeleton (header, constructor, footer and,
for slot-based standards, a tranche section) and the subset of fragment rules
that apply to it. Adding a standard means registering a skeleton and listing
it in the applicable rules; the composer has no per-standard branches.

The registry is immutable once built. Rule order for each standard is
computed at construction: precedence ascending, ties broken by registration
order.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

from ..schemas import TokenSpecification, GeneratorCFG, BlockCategory


class UnsupportedStandardKind(ValueError):
    """Raised when a standard is not one of the registered token standards."""

    def __init__(self, standard: str, known: Sequence[str] = ()):
        self.standard = standard
        self.known = tuple(known)
        super().__init__(
            f"Unsupported token standard '{standard}'. Supported standards: {list(self.known)}"
        )


@dataclass(frozen=True)
class BaseSkeleton:
    """Standard-specific scaffold.

    Templates use ``string.Template`` placeholders (``${contract_name}``).
    ``tranche_template`` is set only for standards that need per-slot
    initialization; it receives the rendered statements as ``${statements}``.
    """

    header_template: str
    constructor_template: str
    footer_template: str
    tranche_template: Optional[str] = None

    @property
    def requires_slot_initialization(self) -> bool:
        return self.tranche_template is not None


@dataclass(frozen=True)
class FragmentRule:
    """A unit of generated text gated by a predicate over the specification.

    Attributes:
        id: Stable fragment id reported in ContractDraft.included_fragment_ids
        applies_to_standards: Standards this rule is registered for
        predicate: spec -> bool, decides inclusion
        render: spec -> str, produces the fragment text
        precedence: Ordering key (ascending)
        category: Building block category the rule belongs to
        triggers: Block names that satisfy the predicate (for annotation)
    """

    id: str
    applies_to_standards: FrozenSet[str]
    predicate: Callable[[TokenSpecification], bool]
    render: Callable[[TokenSpecification], str]
    precedence: int
    category: BlockCategory
    triggers: Tuple[str, ...] = ()


class TemplateRegistry:
    """Static mapping from token standard to skeleton and ordered rules.

    Example:
        registry = TemplateRegistry(skeletons={"ERC-20": erc20}, rules=[kyc_rule])
        registry.get_base_skeleton("ERC-20")
        registry.get_fragment_rules("ERC-20")  # -> (kyc_rule,)
    """

    def __init__(
        self,
        skeletons: Mapping[str, BaseSkeleton],
        rules: Sequence[FragmentRule],
        config: Optional[GeneratorCFG] = None,
    ):
        """Build the registry.

        Args:
            skeletons: Base skeleton per standard
            rules: Fragment rules in registration order
            config: Generator configuration the templates were built with

        Raises:
            ValueError: If a rule id is registered twice or a rule names an
                unknown standard
        """
        self.config = config or GeneratorCFG()
        self._skeletons: Mapping[str, BaseSkeleton] = MappingProxyType(dict(skeletons))

        seen_ids = set()
        for rule in rules:
            if rule.id in seen_ids:
                raise ValueError(f"Fragment rule '{rule.id}' registered twice")
            seen_ids.add(rule.id)
            unknown = rule.applies_to_standards - set(self._skeletons)
            if unknown:
                raise ValueError(
                    f"Fragment rule '{rule.id}' applies to unregistered standards: {sorted(unknown)}"
                )

        self._rules: Tuple[FragmentRule, ...] = tuple(rules)

        # Per-standard order: precedence, then registration index
        ordered: Dict[str, Tuple[FragmentRule, ...]] = {}
        for standard in self._skeletons:
            indexed = [
                (rule.precedence, index, rule)
                for index, rule in enumerate(self._rules)
                if standard in rule.applies_to_standards
            ]
            ordered[standard] = tuple(rule for _, _, rule in sorted(indexed, key=lambda item: item[:2]))
        self._ordered_rules: Mapping[str, Tuple[FragmentRule, ...]] = MappingProxyType(ordered)

    @property
    def standards(self) -> Tuple[str, ...]:
        return tuple(self._skeletons)

    @property
    def rules(self) -> Tuple[FragmentRule, ...]:
        """All rules in registration order."""
        return self._rules

    def supports(self, standard: str) -> bool:
        return standard in self._skeletons

    def get_base_skeleton(self, standard: str) -> BaseSkeleton:
        """Skeleton for a standard.

        Raises:
            UnsupportedStandardKind: If the standard is not registered
        """
        if standard not in self._skeletons:
            raise UnsupportedStandardKind(standard, self.standards)
        return self._skeletons[standard]

    def get_fragment_rules(self, standard: str) -> Tuple[FragmentRule, ...]:
        """Rules applicable to a standard, sorted by precedence then registration order.

        Raises:
            UnsupportedStandardKind: If the standard is not registered
        """
        if standard not in self._ordered_rules:
            raise UnsupportedStandardKind(standard, self.standards)
        return self._ordered_rules[standard]

    def recognized_blocks(self, standard: str) -> Dict[BlockCategory, FrozenSet[str]]:
        """Normalized block names that can trigger some rule of this standard."""
        recognized: Dict[str, set] = {}
        for rule in self.get_fragment_rules(standard):
            recognized.setdefault(rule.category, set()).update(rule.triggers)
        return {category: frozenset(names) for category, names in recognized.items()}

    def __repr__(self) -> str:
        return f"TemplateRegistry(standards={list(self.standards)}, rules={len(self._rules)})"


def build_registry(config: Optional[GeneratorCFG] = None) -> TemplateRegistry:
    """Registry with the built-in skeletons and rule table."""
    from .templates import build_skeletons, build_fragment_rules

    config = config or GeneratorCFG()
    return TemplateRegistry(
        skeletons=build_skeletons(config),
        rules=build_fragment_rules(config),
        config=config,
    )


@lru_cache(maxsize=None)
def default_registry() -> TemplateRegistry:
    """Shared registry built from the default GeneratorCFG."""
    return build_registry()

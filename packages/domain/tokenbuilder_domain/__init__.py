"""Token Builder Domain - token design models and contract draft generation.

This package provides the foundational layer for token design:
- Token specifications (standard, building blocks, metadata, tranches)
- Catalog of standards, building blocks, and product templates
- Contract draft generation from composable template fragments
- Computation blocks that tabulate drafts and tranche schedules

The domain layer is designed to be:
- Framework-agnostic (no web or storage dependencies)
- Testable (pure Python with Pydantic validation)
- Extensible (new standards and fragments are registry entries)
"""

from .schemas import *  # noqa: F403, F401

__version__ = "0.1.0"

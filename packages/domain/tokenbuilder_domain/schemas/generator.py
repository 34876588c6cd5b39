"""Contract generator configuration.

GeneratorCFG holds the values baked into every draft that are not part of a
token specification: license header, compiler pragma, and the defaults used
when optional metadata is absent. A registry is built once per configuration,
so a draft stays a pure function of (specification, registry).
"""

from pydantic import Field

from .base import ValueModel


# 5 years of 365 days
DEFAULT_MATURITY_OFFSET_SECONDS = 157_680_000

DEFAULT_CONVERSION_RATE = 100


class GeneratorCFG(ValueModel):
    """Configuration for contract draft generation.

    Examples:
        # Defaults: MIT license, ^0.8.0 pragma, 5 year default maturity
        GeneratorCFG()

        # Pin a compiler version
        GeneratorCFG(pragma="0.8.24")
    """

    license_identifier: str = Field(
        default="MIT",
        description="SPDX license identifier written in the first line"
    )

    pragma: str = Field(
        default="^0.8.0",
        description="Compiler version constraint for the pragma line"
    )

    default_maturity_offset_seconds: int = Field(
        default=DEFAULT_MATURITY_OFFSET_SECONDS,
        gt=0,
        description="Seconds added to the issuance time when no maturity date is given"
    )

    default_conversion_rate: int = Field(
        default=DEFAULT_CONVERSION_RATE,
        gt=0,
        description="Conversion rate rendered when the specification has none (or 0)"
    )

    default_notice: str = Field(
        default="Tokenized asset draft",
        description="NatSpec notice used when description, product and category are all empty"
    )

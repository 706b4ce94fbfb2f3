"""Pydantic models describing the rate table configuration schema."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Sequence, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from typing_extensions import Self

AVERAGE_MUNICIPALITY = "Average"


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """Represents a single progressive tax bracket."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float
    name: str | None = None

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class _AllowanceSegment(ImmutableModel):
    upper_bound: float | None = Field(default=None, alias="upper")

    def applies_to(self, income: float) -> bool:
        return self.upper_bound is None or income < self.upper_bound


class ProportionalAllowance(_AllowanceSegment):
    """Allowance equal to a share of income, never exceeding the income."""

    kind: Literal["proportional"]
    rate: float

    def amount_for(self, income: float) -> float:
        return min(income * self.rate, income)


class LinearAllowance(_AllowanceSegment):
    """Allowance growing linearly from ``base`` above ``start``."""

    kind: Literal["linear"]
    base: float
    start: float
    rate: float

    def amount_for(self, income: float) -> float:
        return self.base + (income - self.start) * self.rate


class ConstantAllowance(_AllowanceSegment):
    """Fixed allowance regardless of income within the segment."""

    kind: Literal["constant"]
    amount: float

    def amount_for(self, income: float) -> float:
        return self.amount


class PhaseOutAllowance(_AllowanceSegment):
    """Allowance reduced above ``start`` and floored at zero."""

    kind: Literal["phase_out"]
    base: float
    start: float
    rate: float

    def amount_for(self, income: float) -> float:
        amount = self.base - (income - self.start) * self.rate
        return amount if amount > 0 else 0.0


AllowanceSegment = Annotated[
    Union[ProportionalAllowance, LinearAllowance, ConstantAllowance, PhaseOutAllowance],
    Field(discriminator="kind"),
]


class BasicAllowanceConfig(ImmutableModel):
    """Ordered range rules producing the basic allowance (grundavdrag)."""

    segments: Sequence[AllowanceSegment]

    @model_validator(mode="after")
    def _validate_segments(self) -> BasicAllowanceConfig:
        _validate_bound_sequence(self.segments, "allowance segment")
        for segment in self.segments:
            rate = getattr(segment, "rate", 0.0)
            if rate < 0:
                raise ConfigurationError("Allowance rates must be non-negative")
        return self

    def segment_for(self, income: float) -> AllowanceSegment:
        for segment in self.segments:
            if segment.applies_to(income):
                return segment
        return self.segments[-1]


class StateTaxConfig(ImmutableModel):
    """Progressive state tax (statlig skatt) brackets."""

    brackets: Sequence[TaxBracket]

    @model_validator(mode="after")
    def _validate_brackets(self) -> StateTaxConfig:
        _validate_bound_sequence(self.brackets, "tax bracket")
        return self

    @property
    def threshold(self) -> float:
        """Lower bound of the first bracket carrying a positive rate."""

        lower_bound = 0.0
        for bracket in self.brackets:
            if bracket.rate > 0:
                return lower_bound
            if bracket.upper_bound is not None:
                lower_bound = bracket.upper_bound
        return lower_bound


class TaxConstants(ImmutableModel):
    """Global constants exposed alongside the rate tables."""

    basic_allowance: float
    state_tax_threshold: float
    state_tax_rate: float
    average_municipal_rate: float
    pension_contribution_rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxConstants:
        for name, value in self.model_dump().items():
            if value < 0:
                raise ConfigurationError(f"Constant '{name}' must be non-negative")
        return self


class SolverConfig(ImmutableModel):
    """Settings for the gross-from-net reverse solver."""

    seed_multiplier: float = 1.5
    max_iterations: int = 20
    tolerance: float = 100.0

    @model_validator(mode="after")
    def _validate_values(self) -> SolverConfig:
        if self.seed_multiplier <= 0:
            raise ConfigurationError("Solver seed multiplier must be positive")
        if self.max_iterations <= 0:
            raise ConfigurationError("Solver iteration limit must be positive")
        if self.tolerance <= 0:
            raise ConfigurationError("Solver tolerance must be positive")
        return self


class RateTables(ImmutableModel):
    """Structured representation of the packaged rate tables."""

    meta: Mapping[str, Any] = Field(default_factory=dict)
    constants: TaxConstants
    municipalities: Mapping[str, float]
    state_tax: StateTaxConfig
    basic_allowance: BasicAllowanceConfig
    solver: SolverConfig = Field(default_factory=SolverConfig)

    @field_validator("municipalities", mode="before")
    @classmethod
    def _coerce_municipalities(cls, value: Any) -> Mapping[str, float]:
        if isinstance(value, Mapping):
            return {str(key): float(val) for key, val in value.items()}
        raise ConfigurationError("'municipalities' must be a mapping of names to rates")

    @model_validator(mode="after")
    def _validate_tables(self) -> Self:
        for name, rate in self.municipalities.items():
            if rate < 0:
                raise ConfigurationError(f"Municipal rate for {name} must be non-negative")

        average = self.municipalities.get(AVERAGE_MUNICIPALITY)
        if average is None:
            raise ConfigurationError(
                f"Municipal rates must include an '{AVERAGE_MUNICIPALITY}' entry"
            )
        if average != self.constants.average_municipal_rate:
            raise ConfigurationError(
                f"'{AVERAGE_MUNICIPALITY}' municipal rate must equal the "
                "average_municipal_rate constant"
            )
        return self

    @property
    def year(self) -> int | None:
        year = self.meta.get("year")
        return int(year) if year is not None else None

    @property
    def average_rate(self) -> float:
        return self.constants.average_municipal_rate

    def municipality_names(self) -> list[str]:
        return sorted(self.municipalities)


def _validate_bound_sequence(entries: Sequence[Any], label: str) -> None:
    if not entries:
        raise ConfigurationError(f"At least one {label} must be defined")
    last_upper: float | None = None
    for entry in entries:
        upper = entry.upper_bound
        if last_upper is not None and upper is not None and upper <= last_upper:
            raise ConfigurationError(f"Each {label} must be in ascending order")
        last_upper = upper if upper is not None else last_upper
    if entries[-1].upper_bound is not None:
        raise ConfigurationError(f"Final {label} must have an open upper bound")


__all__ = [
    "AVERAGE_MUNICIPALITY",
    "AllowanceSegment",
    "BasicAllowanceConfig",
    "ConfigurationError",
    "ConstantAllowance",
    "ImmutableModel",
    "LinearAllowance",
    "PhaseOutAllowance",
    "ProportionalAllowance",
    "RateTables",
    "SolverConfig",
    "StateTaxConfig",
    "TaxBracket",
    "TaxConstants",
    "ValidationError",
]

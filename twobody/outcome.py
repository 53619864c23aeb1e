"""
Explicit success/failure records returned by every kinematics stage.

A stage never signals a physics failure by raising or by returning a falsy
value of its own result type. It returns an Outcome carrying either the value
or the Failure kind that stopped the calculation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Failure(Enum):
    """Reasons a kinematics calculation produces no result."""

    MISSING_INPUT = "missing_input"
    INVALID_ENERGY = "invalid_energy"
    UNBALANCED_REACTION = "unbalanced_reaction"
    ENERGETICALLY_FORBIDDEN = "energetically_forbidden"
    NO_KINEMATIC_SOLUTION = "no_kinematic_solution"
    INVALID_RECOIL = "invalid_recoil"
    UNKNOWN_NUCLIDE = "unknown_nuclide"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a computed value or the failure that prevented it."""

    value: Optional[T] = None
    failure: Optional[Failure] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure, message: str = "") -> "Outcome[T]":
        return cls(failure=failure, message=message)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the value, raising ValueError if this is a failure."""
        if self.failure is not None:
            raise ValueError(f"{self.failure.value}: {self.message}")
        return self.value

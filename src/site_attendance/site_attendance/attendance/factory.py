from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.enums import ClockOutPolicy
from ..core.exceptions import ValidationError
from .strategies.auto_derived_strategy import AutoDerivedStrategy
from .strategies.base import ClockOutStrategy
from .strategies.fixed_default_strategy import FixedDefaultStrategy


@dataclass
class ClockOutStrategyFactory:
    """Factory Pattern: one configured policy, never a blend of both."""

    def for_policy(self, policy: Union[ClockOutPolicy, str]) -> ClockOutStrategy:
        try:
            policy = ClockOutPolicy(str(policy.value if isinstance(policy, ClockOutPolicy) else policy).lower())
        except ValueError:
            raise ValidationError(f"Unknown clock-out policy: {policy!r}")

        if policy == ClockOutPolicy.FIXED_DEFAULT:
            return FixedDefaultStrategy()
        return AutoDerivedStrategy()

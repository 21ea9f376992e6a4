from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import parse_enum
from ..core.enums import CyclePolicy
from .policies.base import CheckInPolicy
from .policies.multiple_policy import MultipleCyclePolicy
from .policies.strict_policy import StrictCyclePolicy


@dataclass
class CheckInPolicyFactory:
    """Factory Pattern: map the configured cycle policy to its strategy."""

    def for_policy(self, policy: CyclePolicy | str) -> CheckInPolicy:
        policy = parse_enum(CyclePolicy, policy, "Attendance cycle policy")
        if policy == CyclePolicy.MULTIPLE:
            return MultipleCyclePolicy()
        return StrictCyclePolicy()

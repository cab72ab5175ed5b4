from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_TIME_CREDIT_POLICY
from ..core.exceptions import UnknownPolicy
from .policies.base import TimeCreditPolicy
from .policies.scan_gap import ScanGapPolicy
from .policies.unconditional_forward import UnconditionalForwardPolicy
from .policies.workflow_gated import WorkflowGatedPolicy

_POLICIES = {
    WorkflowGatedPolicy.name: WorkflowGatedPolicy,
    UnconditionalForwardPolicy.name: UnconditionalForwardPolicy,
    ScanGapPolicy.name: ScanGapPolicy,
}


@dataclass
class TimeCreditPolicyFactory:
    """Factory Pattern: choose the time-credit policy by configured name."""

    default_name: str = DEFAULT_TIME_CREDIT_POLICY

    def available(self) -> list[str]:
        return sorted(_POLICIES)

    def create(self, name: str | None = None) -> TimeCreditPolicy:
        key = (name or self.default_name).strip().lower()
        policy_cls = _POLICIES.get(key)
        if policy_cls is None:
            raise UnknownPolicy(f"Unknown time credit policy {key!r}; expected one of {', '.join(self.available())}")
        return policy_cls()

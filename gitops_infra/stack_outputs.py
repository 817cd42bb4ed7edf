"""
Stack output resolution
Reads published outputs of upstream stacks and publishes this stack's outputs
"""

import pulumi
from typing import Any, Dict

from .errors import StackConfigurationError


def validate_stack_name(stack_name: str) -> str:
    """
    Validate a fully or partially qualified stack name

    Accepts `stack`, `project/stack` (self-managed backends) and
    `org/project/stack` (Pulumi Cloud).
    """
    parts = (stack_name or "").split("/")
    if len(parts) > 3 or not all(part.strip() for part in parts):
        raise StackConfigurationError(
            f"Stack reference must be 'stack', 'project/stack' or "
            f"'org/project/stack', got: {stack_name!r}")
    return stack_name


class UpstreamStack:
    """Read-only handle on the published outputs of an already deployed stack"""

    def __init__(self, stack_name: str):
        self.name = validate_stack_name(stack_name)
        self.reference = pulumi.StackReference(stack_name)

    def require_output(self, key: str) -> pulumi.Output:
        """
        Look up a published output, failing before any resource is declared

        The existence check blocks until the upstream state is loaded; the
        returned value stays deferred so secretness carries over.

        Raises:
            StackConfigurationError: the upstream stack was never deployed or
                does not export `key`
        """
        try:
            details = self.reference.get_output_details(key)
        except Exception as e:
            raise StackConfigurationError(
                f"Could not read outputs of stack '{self.name}'; has it been deployed? ({e})") from e
        if details.value is None and details.secret_value is None:
            raise StackConfigurationError(
                f"Stack '{self.name}' does not export required output '{key}'. "
                f"Deploy it first or check the stack name.")
        pulumi.log.info(f"Resolved output '{key}' from stack {self.name}")
        return self.reference.require_output(key)


def export_outputs(outputs: Dict[str, Any]) -> None:
    """Publish every entry as a named stack output"""
    for name, value in outputs.items():
        pulumi.export(name, value)

"""
Test helpers
Recording stand-ins for the pulumi_aws / pulumi_kubernetes modules and for
stack references, so declaration functions can be exercised without an engine
"""

import contextlib
from types import SimpleNamespace
from typing import Any, Dict, List, NamedTuple, Tuple
from unittest.mock import MagicMock, patch

import pulumi

AWS_MODULES = [
    "gitops_infra.vpc.functions",
    "gitops_infra.iam.functions",
    "gitops_infra.eks.functions",
    "gitops_infra.identity.functions",
]

K8S_MODULES = [
    "gitops_infra.context",
    "gitops_infra.identity.functions",
    "gitops_infra.operators.functions",
    "gitops_infra.gitops.functions",
    "gitops_infra.kargo.functions",
]


class RecordedResource(NamedTuple):
    type: str
    name: str
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]
    handle: MagicMock

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.kwargs.get("metadata") or {}

    @property
    def args_id(self):
        """Resource ID passed to a `.get` read, None for declarations"""
        return self.args[1] if len(self.args) > 1 else None

    @property
    def depends_on(self) -> List[Any]:
        opts = self.kwargs.get("opts")
        return list(getattr(opts, "depends_on", None) or [])


class _FakeModule:
    """Attribute chain ending in a call that records a resource; *Args calls return dicts"""

    def __init__(self, recorder: "ResourceRecorder", path: Tuple[str, ...]):
        self._recorder = recorder
        self._path = path

    def __getattr__(self, attr):
        if attr.startswith("__"):
            raise AttributeError(attr)
        return _FakeModule(self._recorder, self._path + (attr,))

    def __call__(self, *args, **kwargs):
        if self._path[-1].endswith("Args"):
            return dict(kwargs)
        return self._recorder.record(".".join(self._path), args, kwargs)


class ResourceRecorder:
    def __init__(self):
        self.resources: List[RecordedResource] = []

    def module(self, prefix: str) -> _FakeModule:
        return _FakeModule(self, (prefix,))

    def record(self, type_: str, args, kwargs) -> MagicMock:
        handle = MagicMock()
        # ResourceOptions rejects depends_on entries that are not Resources
        handle.__class__ = pulumi.CustomResource
        metadata = kwargs.get("metadata")
        if isinstance(metadata, dict):
            handle.metadata.name = metadata.get("name")
            handle.metadata.namespace = metadata.get("namespace")
        self.resources.append(RecordedResource(type_, args[0], tuple(args), kwargs, handle))
        return handle

    def of_type(self, type_: str) -> List[RecordedResource]:
        return [r for r in self.resources if r.type == type_]

    def named(self, name: str) -> RecordedResource:
        matches = [r for r in self.resources if r.name == name]
        assert len(matches) == 1, f"expected one resource named {name}, found {len(matches)}"
        return matches[0]

    def by_handle(self, handle) -> RecordedResource:
        for resource in self.resources:
            if resource.handle is handle:
                return resource
        raise KeyError(handle)

    def read_id(self, resource: RecordedResource) -> str:
        """
        ID of a `.get` read

        A deferred ID built with `<dependency>.status.apply(fn)` is evaluated
        by calling `fn` on a status carrying the dependency's recorded namespace.
        """
        resource_id = resource.args_id
        if isinstance(resource_id, str):
            return resource_id
        for dependency in self.dependencies(resource):
            status = dependency.handle.status
            if status.apply.called and status.apply.return_value is resource_id:
                derive = status.apply.call_args[0][0]
                return derive({"namespace": dependency.kwargs.get("namespace")})
        raise KeyError(f"cannot resolve the ID of {resource.name}")

    def dependencies(self, resource: RecordedResource) -> List[RecordedResource]:
        return [self.by_handle(handle) for handle in resource.depends_on]

    def depends_on(self, resource: RecordedResource, target: RecordedResource) -> bool:
        """True when `target` is reachable through explicit dependency edges"""
        seen = set()
        pending = [resource]
        while pending:
            current = pending.pop()
            for dependency in self.dependencies(current):
                if dependency.handle is target.handle:
                    return True
                if id(dependency.handle) not in seen:
                    seen.add(id(dependency.handle))
                    pending.append(dependency)
        return False


class FakeStackReference:
    """Stand-in for pulumi.StackReference backed by a dict of deployed stacks"""

    def __init__(self, deployed: Dict[str, Dict[str, Any]], name: str):
        self.name = name
        self._deployed = deployed

    def get_output_details(self, key):
        if self.name not in self._deployed:
            raise Exception(f"unknown stack {self.name}")
        return SimpleNamespace(value=self._deployed[self.name].get(key), secret_value=None)

    def require_output(self, key):
        return self._deployed[self.name][key]


@contextlib.contextmanager
def recording_providers(deployed_stacks: Dict[str, Dict[str, Any]] = None):
    """Patch provider modules and stack references; yields the recorder"""
    recorder = ResourceRecorder()
    deployed_stacks = deployed_stacks or {}
    with contextlib.ExitStack() as stack:
        for module in AWS_MODULES:
            stack.enter_context(patch(f"{module}.aws", recorder.module("aws")))
        for module in K8S_MODULES:
            stack.enter_context(patch(f"{module}.k8s", recorder.module("k8s")))
        stack.enter_context(patch(
            "pulumi.StackReference",
            side_effect=lambda name: FakeStackReference(deployed_stacks, name)))
        yield recorder

"""Builder for LVMNode objects."""

from __future__ import annotations

from typing import Iterable

from lvmlocalpv.apis import BuildError, LVMNode, OwnerReference, VolumeGroup


class Builder:
    """Builds an LVMNode, collecting errors until build() is called."""

    def __init__(self, node: LVMNode | None = None) -> None:
        self._node = node if node is not None else LVMNode()
        self._errors: list[str] = []

    def with_namespace(self, namespace: str) -> Builder:
        """Set the namespace of the node."""
        if not namespace:
            self._errors.append("failed to build lvm node object: missing namespace")
            return self
        self._node.metadata.namespace = namespace
        return self

    def with_name(self, name: str) -> Builder:
        """Set the name of the node."""
        if not name:
            self._errors.append("failed to build lvm node object: missing name")
            return self
        self._node.metadata.name = name
        return self

    def with_volume_groups(self, vgs: Iterable[VolumeGroup]) -> Builder:
        """Set the volume groups of the node."""
        self._node.volume_groups = list(vgs)
        return self

    def with_owner_references(self, *args: OwnerReference) -> Builder:
        """Set the owner references of the node."""
        self._node.metadata.owner_references = list(args)
        return self

    def build(self) -> LVMNode:
        """Return the node, or raise BuildError if any step failed."""
        if self._errors:
            raise BuildError(self._errors)
        return self._node


def build_from(node: LVMNode | None) -> Builder:
    """Return a builder working on an existing node."""
    if node is None:
        builder = Builder()
        builder._errors.append("failed to build lvm node object: nil node")
        return builder
    return Builder(node)
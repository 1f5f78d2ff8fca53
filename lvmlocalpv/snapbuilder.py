"""Builder for LVMSnapshot objects."""

from __future__ import annotations

from typing import Iterable, Mapping

from lvmlocalpv.apis import BuildError, LVMSnapshot


class Builder:
    """Builds an LVMSnapshot, collecting errors until build() is called."""

    def __init__(self, snap: LVMSnapshot | None = None) -> None:
        self._snap = snap if snap is not None else LVMSnapshot()
        self._errors: list[str] = []

    def with_namespace(self, namespace: str) -> Builder:
        """Set the namespace of the snapshot."""
        if not namespace:
            self._errors.append("failed to build csi snap object: missing namespace")
            return self
        self._snap.metadata.namespace = namespace
        return self

    def with_name(self, name: str) -> Builder:
        """Set the name of the snapshot."""
        if not name:
            self._errors.append("failed to build csi snap object: missing name")
            return self
        self._snap.metadata.name = name
        return self

    def with_labels(self, labels: Mapping[str, str] | None) -> Builder:
        """Merge the given labels into the existing ones."""
        if not labels:
            return self
        if self._snap.metadata.labels is None:
            self._snap.metadata.labels = {}
        self._snap.metadata.labels.update(labels)
        return self

    def with_finalizer(self, finalizer: Iterable[str]) -> Builder:
        """Append the given finalizers to the existing ones."""
        self._snap.metadata.finalizers.extend(finalizer)
        return self

    def with_capacity(self, capacity: str) -> Builder:
        """Set the capacity of the snapshot."""
        if not capacity:
            self._errors.append("failed to build lvm volume object: missing capacity")
            return self
        self._snap.spec.capacity = capacity
        return self

    def build(self) -> LVMSnapshot:
        """Return the snapshot, or raise BuildError if any step failed."""
        if self._errors:
            raise BuildError(self._errors)
        return self._snap


def build_from(snap: LVMSnapshot | None) -> Builder:
    """Return a builder working on an existing snapshot."""
    if snap is None:
        builder = Builder()
        builder._errors.append("failed to build snap object: nil snap")
        return builder
    return Builder(snap)
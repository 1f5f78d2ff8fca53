"""Builder for LVMVolume objects."""

from __future__ import annotations

from typing import Iterable, Mapping

from lvmlocalpv.apis import BuildError, LVMVolume


class Builder:
    """Builds an LVMVolume, collecting errors until build() is called."""

    def __init__(self, volume: LVMVolume | None = None) -> None:
        self._volume = volume if volume is not None else LVMVolume()
        self._errors: list[str] = []

    def _fail(self, message: str) -> Builder:
        self._errors.append(message)
        return self

    def with_namespace(self, namespace: str) -> Builder:
        """Set the namespace of the volume."""
        if not namespace:
            return self._fail("failed to build lvm volume object: missing namespace")
        self._volume.metadata.namespace = namespace
        return self

    def with_name(self, name: str) -> Builder:
        """Set the name of the volume."""
        if not name:
            return self._fail("failed to build lvm volume object: missing name")
        self._volume.metadata.name = name
        return self

    def with_capacity(self, capacity: str) -> Builder:
        """Set the capacity of the volume."""
        if not capacity:
            return self._fail("failed to build lvm volume object: missing capacity")
        self._volume.spec.capacity = capacity
        return self

    def with_owner_node(self, host: str) -> Builder:
        """Set the node on which the volume should be provisioned."""
        self._volume.spec.owner_node_id = host
        return self

    def with_volume_status(self, status: str) -> Builder:
        """Set the state of the volume."""
        self._volume.status.state = status
        return self

    def with_shared(self, shared: str) -> Builder:
        """Set whether the volume may be shared among pods."""
        self._volume.spec.shared = shared
        return self

    def with_thin_provision(self, thin_provision: str) -> Builder:
        """Set whether the volume is thinly provisioned."""
        self._volume.spec.thin_provision = thin_provision
        return self

    def with_vol_group(self, vg: str) -> Builder:
        """Set the volume group in which the volume is created."""
        if not vg:
            return self._fail("failed to build lvm volume object: missing vg name")
        self._volume.spec.vol_group = vg
        return self

    def with_vg_pattern(self, pattern: str) -> Builder:
        """Set the regex pattern used to choose the volume group."""
        if not pattern:
            return self._fail("failed to build lvm volume object: missing vg name")
        self._volume.spec.vg_pattern = pattern
        return self

    def with_node_name(self, name: str) -> Builder:
        """Set the node on which the volume is created."""
        if not name:
            return self._fail("failed to build lvm volume object: missing node name")
        self._volume.spec.owner_node_id = name
        return self

    def with_labels(self, labels: Mapping[str, str] | None) -> Builder:
        """Merge the given labels into the existing ones."""
        if not labels:
            return self
        if self._volume.metadata.labels is None:
            self._volume.metadata.labels = {}
        self._volume.metadata.labels.update(labels)
        return self

    def with_finalizer(self, finalizer: Iterable[str]) -> Builder:
        """Append the given finalizers to the existing ones."""
        self._volume.metadata.finalizers.extend(finalizer)
        return self

    def build(self) -> LVMVolume:
        """Return the volume, or raise BuildError if any step failed."""
        if self._errors:
            raise BuildError(self._errors)
        return self._volume


def build_from(volume: LVMVolume | None) -> Builder:
    """Return a builder working on an existing volume."""
    if volume is None:
        builder = Builder()
        builder._errors.append("failed to build volume object: nil volume")
        return builder
    return Builder(volume)
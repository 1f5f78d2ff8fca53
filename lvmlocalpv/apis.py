"""Custom resource types of the local.openebs.io/v1alpha1 API group."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar


class BuildError(ValueError):
    """Raised when an object builder collected one or more errors."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("[" + " ".join(str(e) for e in self.errors) + "]")


@dataclass(frozen=True)
class GroupResource:
    """A resource name qualified by its API group."""

    group: str
    resource: str


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def with_resource(self, resource: str) -> GroupResource:
        """Qualify an unqualified resource name with this group."""
        return GroupResource(self.group, resource)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version


SCHEME_GROUP_VERSION = GroupVersion(group="local.openebs.io", version="v1alpha1")
API_VERSION = str(SCHEME_GROUP_VERSION)

_KNOWN_KINDS = (
    "LVMVolume",
    "LVMVolumeList",
    "LVMSnapshot",
    "LVMSnapshotList",
    "LVMNode",
    "LVMNodeList",
)


def resource(resource: str) -> GroupResource:
    """Return the group-qualified form of an unqualified resource name."""
    return SCHEME_GROUP_VERSION.with_resource(resource)


def known_kinds() -> tuple[str, ...]:
    """Return the kinds registered for this API group and version."""
    return _KNOWN_KINDS


@dataclass
class OwnerReference:
    """Reference to an object that owns another object."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: bool | None = None
    block_owner_deletion: bool | None = None


def _owner_ref_to_dict(ref: OwnerReference) -> dict[str, Any]:
    out: dict[str, Any] = {
        "apiVersion": ref.api_version,
        "kind": ref.kind,
        "name": ref.name,
        "uid": ref.uid,
    }
    if ref.controller is not None:
        out["controller"] = ref.controller
    if ref.block_owner_deletion is not None:
        out["blockOwnerDeletion"] = ref.block_owner_deletion
    return out


def _owner_ref_from_dict(data: dict[str, Any]) -> OwnerReference:
    return OwnerReference(
        api_version=data.get("apiVersion", ""),
        kind=data.get("kind", ""),
        name=data.get("name", ""),
        uid=data.get("uid", ""),
        controller=data.get("controller"),
        block_owner_deletion=data.get("blockOwnerDeletion"),
    )


@dataclass
class ObjectMeta:
    """Standard object metadata."""

    name: str = ""
    generate_name: str = ""
    namespace: str = ""
    uid: str = ""
    resource_version: str = ""
    generation: int = 0
    creation_timestamp: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    owner_references: list[OwnerReference] = field(default_factory=list)
    finalizers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form, leaving out empty fields."""
        out: dict[str, Any] = {}
        scalars = (
            ("name", self.name),
            ("generateName", self.generate_name),
            ("namespace", self.namespace),
            ("uid", self.uid),
            ("resourceVersion", self.resource_version),
            ("generation", self.generation),
            ("creationTimestamp", self.creation_timestamp),
        )
        for key, value in scalars:
            if value:
                out[key] = value
        if self.labels:
            out["labels"] = dict(self.labels)
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.owner_references:
            out["ownerReferences"] = [_owner_ref_to_dict(r) for r in self.owner_references]
        if self.finalizers:
            out["finalizers"] = list(self.finalizers)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ObjectMeta:
        """Build metadata from its wire form."""
        data = data or {}
        labels = data.get("labels")
        annotations = data.get("annotations")
        return cls(
            name=data.get("name", ""),
            generate_name=data.get("generateName", ""),
            namespace=data.get("namespace", ""),
            uid=data.get("uid", ""),
            resource_version=data.get("resourceVersion", ""),
            generation=int(data.get("generation", 0) or 0),
            creation_timestamp=data.get("creationTimestamp"),
            labels=dict(labels) if labels is not None else None,
            annotations=dict(annotations) if annotations is not None else None,
            owner_references=[
                _owner_ref_from_dict(r) for r in data.get("ownerReferences") or []
            ],
            finalizers=list(data.get("finalizers") or []),
        )


def _type_meta(kind: str) -> dict[str, Any]:
    return {"apiVersion": API_VERSION, "kind": kind}


def _list_to_dict(kind: str, metadata: dict[str, Any], items: list[Any]) -> dict[str, Any]:
    out = _type_meta(kind)
    out["metadata"] = copy.deepcopy(metadata)
    out["items"] = [item.to_dict() for item in items]
    return out


def _list_parts(data: dict[str, Any], item_type: Any) -> tuple[dict[str, Any], list[Any]]:
    metadata = copy.deepcopy(data.get("metadata") or {})
    items = [item_type.from_dict(i) for i in data.get("items") or []]
    return metadata, items


class _Sequence:
    """Length and iteration over the items of a list kind."""

    items: list[Any]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass
class VolumeGroup:
    """Attributes of an LVM volume group present on a node."""

    name: str = ""
    uuid: str = ""
    size: str = "0"
    free: str = "0"
    lv_count: int = 0
    pv_count: int = 0

    def _to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "uuid": self.uuid,
            "size": self.size,
            "free": self.free,
            "lvCount": self.lv_count,
            "pvCount": self.pv_count,
        }

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> VolumeGroup:
        return cls(
            name=data.get("name", ""),
            uuid=data.get("uuid", ""),
            size=str(data.get("size", "0")),
            free=str(data.get("free", "0")),
            lv_count=int(data.get("lvCount", 0)),
            pv_count=int(data.get("pvCount", 0)),
        )


@dataclass
class LVMNode:
    """The LVM volume groups available on one node."""

    kind: ClassVar[str] = "LVMNode"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    volume_groups: list[VolumeGroup] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        out = _type_meta(self.kind)
        out["metadata"] = self.metadata.to_dict()
        out["volumeGroups"] = [vg._to_dict() for vg in self.volume_groups]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMNode:
        """Build a node from its wire form."""
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            volume_groups=[
                VolumeGroup._from_dict(vg) for vg in data.get("volumeGroups") or []
            ],
        )


@dataclass
class LVMNodeList(_Sequence):
    """A collection of LVMNode resources."""

    kind: ClassVar[str] = "LVMNodeList"

    metadata: dict[str, Any] = field(default_factory=dict)
    items: list[LVMNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        return _list_to_dict(self.kind, self.metadata, self.items)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMNodeList:
        """Build the list from its wire form."""
        metadata, items = _list_parts(data, LVMNode)
        return cls(metadata=metadata, items=items)


class VolumeErrorCode(str, enum.Enum):
    """Class of error met while provisioning a volume."""

    INTERNAL = "Internal"
    INSUFFICIENT_CAPACITY = "InsufficientCapacity"


@dataclass
class VolumeError:
    """Error met while provisioning or expanding a volume."""

    code: VolumeErrorCode | str = ""
    message: str = ""

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        code = self.code.value if isinstance(self.code, VolumeErrorCode) else self.code
        if code:
            out["code"] = code
        if self.message:
            out["message"] = self.message
        return out

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> VolumeError:
        raw = data.get("code", "")
        try:
            code: VolumeErrorCode | str = VolumeErrorCode(raw)
        except ValueError:
            code = raw
        return cls(code=code, message=data.get("message", ""))


@dataclass
class VolStatus:
    """Current state of a volume provisioning request."""

    state: str = ""
    error: VolumeError | None = None

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.state:
            out["state"] = self.state
        if self.error is not None:
            out["error"] = self.error._to_dict()
        return out

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> VolStatus:
        data = data or {}
        err = data.get("error")
        return cls(
            state=data.get("state", ""),
            error=VolumeError._from_dict(err) if err is not None else None,
        )


@dataclass
class VolumeInfo:
    """Specification of an LVM volume."""

    owner_node_id: str = ""
    vol_group: str = ""
    vg_pattern: str = ""
    capacity: str = ""
    shared: str = ""
    thin_provision: str = ""

    def _to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ownerNodeID": self.owner_node_id,
            "volGroup": self.vol_group,
            "vgPattern": self.vg_pattern,
            "capacity": self.capacity,
        }
        if self.shared:
            out["shared"] = self.shared
        if self.thin_provision:
            out["thinProvision"] = self.thin_provision
        return out

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> VolumeInfo:
        data = data or {}
        return cls(
            owner_node_id=data.get("ownerNodeID", ""),
            vol_group=data.get("volGroup", ""),
            vg_pattern=data.get("vgPattern", ""),
            capacity=data.get("capacity", ""),
            shared=data.get("shared", ""),
            thin_provision=data.get("thinProvision", ""),
        )


@dataclass
class LVMVolume:
    """An LVM based volume."""

    kind: ClassVar[str] = "LVMVolume"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VolumeInfo = field(default_factory=VolumeInfo)
    status: VolStatus = field(default_factory=VolStatus)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        out = _type_meta(self.kind)
        out["metadata"] = self.metadata.to_dict()
        out["spec"] = self.spec._to_dict()
        out["status"] = self.status._to_dict()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMVolume:
        """Build a volume from its wire form."""
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=VolumeInfo._from_dict(data.get("spec")),
            status=VolStatus._from_dict(data.get("status")),
        )


@dataclass
class LVMVolumeList(_Sequence):
    """A collection of LVMVolume resources."""

    kind: ClassVar[str] = "LVMVolumeList"

    metadata: dict[str, Any] = field(default_factory=dict)
    items: list[LVMVolume] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        return _list_to_dict(self.kind, self.metadata, self.items)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMVolumeList:
        """Build the list from its wire form."""
        metadata, items = _list_parts(data, LVMVolume)
        return cls(metadata=metadata, items=items)


@dataclass
class SnapStatus:
    """Whether a snapshot was created successfully."""

    state: str = ""


@dataclass
class LVMSnapshot:
    """A snapshot of an LVM volume."""

    kind: ClassVar[str] = "LVMSnapshot"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: VolumeInfo = field(default_factory=VolumeInfo)
    status: SnapStatus = field(default_factory=SnapStatus)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        out = _type_meta(self.kind)
        out["metadata"] = self.metadata.to_dict()
        out["spec"] = self.spec._to_dict()
        out["status"] = {"state": self.status.state} if self.status.state else {}
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMSnapshot:
        """Build a snapshot from its wire form."""
        status = data.get("status") or {}
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=VolumeInfo._from_dict(data.get("spec")),
            status=SnapStatus(state=status.get("state", "")),
        )


@dataclass
class LVMSnapshotList(_Sequence):
    """A collection of LVMSnapshot resources."""

    kind: ClassVar[str] = "LVMSnapshotList"

    metadata: dict[str, Any] = field(default_factory=dict)
    items: list[LVMSnapshot] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire form."""
        return _list_to_dict(self.kind, self.metadata, self.items)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LVMSnapshotList:
        """Build the list from its wire form."""
        metadata, items = _list_parts(data, LVMSnapshot)
        return cls(metadata=metadata, items=items)
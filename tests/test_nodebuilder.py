import pytest

from lvmlocalpv.apis import BuildError, LVMNode, ObjectMeta, OwnerReference, VolumeGroup
from lvmlocalpv.nodebuilder import Builder, build_from


def test_build_sets_fields():
    vgs = [VolumeGroup(name="lvmvg", uuid="uuid-1", lv_count=2, pv_count=1)]
    node = Builder().with_name("node1").with_namespace("openebs").with_volume_groups(vgs).build()
    assert node.metadata.name == "node1"
    assert node.metadata.namespace == "openebs"
    assert node.volume_groups == vgs


def test_missing_name_raises():
    with pytest.raises(BuildError) as info:
        Builder().with_name("").build()
    assert info.value.errors == ["failed to build lvm node object: missing name"]


def test_missing_namespace_raises():
    with pytest.raises(BuildError) as info:
        Builder().with_namespace("").build()
    assert info.value.errors == ["failed to build lvm node object: missing namespace"]


def test_errors_accumulate_in_order():
    with pytest.raises(BuildError) as info:
        Builder().with_namespace("").with_name("").build()
    assert info.value.errors == [
        "failed to build lvm node object: missing namespace",
        "failed to build lvm node object: missing name",
    ]
    assert "missing namespace" in str(info.value)


def test_build_from_none_fails():
    with pytest.raises(BuildError) as info:
        build_from(None).with_name("x").build()
    assert info.value.errors == ["failed to build lvm node object: nil node"]


def test_build_from_existing_modifies_same_object():
    original = LVMNode(metadata=ObjectMeta(name="old"))
    built = build_from(original).with_name("new").build()
    assert built is original
    assert original.metadata.name == "new"


def test_owner_references_are_set():
    ref = OwnerReference(api_version="v1", kind="Node", name="node1", uid="uid-1")
    node = Builder().with_owner_references(ref).build()
    assert node.metadata.owner_references == [ref]


def test_owner_references_replace_previous():
    first = OwnerReference(kind="Node", name="a")
    second = OwnerReference(kind="Node", name="b")
    node = Builder().with_owner_references(first).with_owner_references(second).build()
    assert [r.name for r in node.metadata.owner_references] == ["b"]


def test_built_node_round_trips_through_wire_form():
    node = (
        Builder()
        .with_name("node1")
        .with_namespace("openebs")
        .with_volume_groups([VolumeGroup(name="lvmvg", uuid="u", size="1Gi", free="1Gi")])
        .build()
    )
    assert LVMNode.from_dict(node.to_dict()) == node
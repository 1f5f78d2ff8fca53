import pytest

from lvmlocalpv.apis import BuildError, LVMVolume
from lvmlocalpv.volbuilder import Builder, build_from


def test_full_build_sets_fields():
    vol = (
        Builder()
        .with_name("pvc-1")
        .with_namespace("openebs")
        .with_capacity("5368709120")
        .with_owner_node("node-a")
        .with_volume_status("Pending")
        .with_shared("yes")
        .with_thin_provision("no")
        .with_vol_group("lvmvg")
        .with_vg_pattern("^lvmvg$")
        .build()
    )
    assert vol.metadata.name == "pvc-1"
    assert vol.metadata.namespace == "openebs"
    assert vol.spec.capacity == "5368709120"
    assert vol.spec.owner_node_id == "node-a"
    assert vol.status.state == "Pending"
    assert vol.spec.shared == "yes"
    assert vol.spec.thin_provision == "no"
    assert vol.spec.vol_group == "lvmvg"
    assert vol.spec.vg_pattern == "^lvmvg$"


def test_node_name_sets_owner():
    vol = Builder().with_node_name("node-b").build()
    assert vol.spec.owner_node_id == "node-b"


@pytest.mark.parametrize(
    "step, message",
    [
        ("with_name", "failed to build lvm volume object: missing name"),
        ("with_namespace", "failed to build lvm volume object: missing namespace"),
        ("with_capacity", "failed to build lvm volume object: missing capacity"),
        ("with_vol_group", "failed to build lvm volume object: missing vg name"),
        ("with_vg_pattern", "failed to build lvm volume object: missing vg name"),
        ("with_node_name", "failed to build lvm volume object: missing node name"),
    ],
)
def test_empty_values_fail(step, message):
    builder = getattr(Builder(), step)("")
    with pytest.raises(BuildError) as info:
        builder.build()
    assert info.value.errors == [message]


def test_errors_accumulate():
    builder = Builder().with_name("").with_capacity("")
    with pytest.raises(BuildError) as info:
        builder.build()
    assert len(info.value.errors) == 2


def test_build_from_none():
    with pytest.raises(BuildError) as info:
        build_from(None).build()
    assert info.value.errors == ["failed to build volume object: nil volume"]


def test_build_from_existing_modifies_same_object():
    original = LVMVolume()
    original.metadata.name = "vol"
    built = build_from(original).with_capacity("1024").build()
    assert built is original
    assert built.metadata.name == "vol"
    assert built.spec.capacity == "1024"


def test_labels_merge_and_empty_ignored():
    vol = (
        Builder()
        .with_labels({"a": "1"})
        .with_labels({"b": "2", "a": "3"})
        .with_labels({})
        .build()
    )
    assert vol.metadata.labels == {"a": "3", "b": "2"}


def test_empty_labels_leave_none():
    vol = Builder().with_labels(None).build()
    assert vol.metadata.labels is None


def test_finalizers_append():
    vol = Builder().with_finalizer(["x"]).with_finalizer(["y", "z"]).build()
    assert vol.metadata.finalizers == ["x", "y", "z"]


def test_built_volume_round_trips():
    vol = Builder().with_name("v").with_vol_group("lvmvg").with_capacity("10").build()
    assert LVMVolume.from_dict(vol.to_dict()) == vol
import pytest

from lvmlocalpv.apis import BuildError, LVMSnapshot, ObjectMeta
from lvmlocalpv.snapbuilder import Builder, build_from


def test_build_sets_fields():
    snap = (
        Builder()
        .with_name("snap1")
        .with_namespace("openebs")
        .with_capacity("5368709120")
        .build()
    )
    assert snap.metadata.name == "snap1"
    assert snap.metadata.namespace == "openebs"
    assert snap.spec.capacity == "5368709120"


@pytest.mark.parametrize(
    "step, message",
    [
        (lambda b: b.with_name(""), "failed to build csi snap object: missing name"),
        (lambda b: b.with_namespace(""), "failed to build csi snap object: missing namespace"),
        (lambda b: b.with_capacity(""), "failed to build lvm volume object: missing capacity"),
    ],
)
def test_missing_values_fail_build(step, message):
    builder = Builder()
    step(builder)
    with pytest.raises(BuildError) as info:
        builder.build()
    assert info.value.errors == [message]


def test_errors_accumulate():
    builder = Builder().with_name("").with_namespace("")
    with pytest.raises(BuildError) as info:
        builder.build()
    assert len(info.value.errors) == 2


def test_build_from_none_fails():
    with pytest.raises(BuildError) as info:
        build_from(None).with_name("snap1").build()
    assert info.value.errors == ["failed to build snap object: nil snap"]


def test_build_from_existing_returns_same_object():
    original = LVMSnapshot(metadata=ObjectMeta(name="snap1"))
    built = build_from(original).with_namespace("openebs").build()
    assert built is original
    assert original.metadata.namespace == "openebs"


def test_labels_merge():
    original = LVMSnapshot(metadata=ObjectMeta(labels={"a": "1", "b": "2"}))
    built = build_from(original).with_labels({"b": "3", "c": "4"}).build()
    assert built.metadata.labels == {"a": "1", "b": "3", "c": "4"}


def test_empty_labels_leave_labels_unset():
    snap = Builder().with_labels({}).build()
    assert snap.metadata.labels is None


def test_labels_are_copied():
    labels = {"k": "v"}
    snap = Builder().with_labels(labels).build()
    labels["k"] = "changed"
    assert snap.metadata.labels == {"k": "v"}


def test_finalizers_append():
    snap = (
        Builder()
        .with_finalizer(["lvm.openebs.io/finalizer"])
        .with_finalizer(["other", "third"])
        .build()
    )
    assert snap.metadata.finalizers == ["lvm.openebs.io/finalizer", "other", "third"]


def test_built_snapshot_round_trips():
    snap = (
        Builder()
        .with_name("snap1")
        .with_namespace("openebs")
        .with_labels({"app": "busybox"})
        .with_finalizer(["f"])
        .with_capacity("5368709120")
        .build()
    )
    assert LVMSnapshot.from_dict(snap.to_dict()) == snap
    assert snap.to_dict()["kind"] == "LVMSnapshot"
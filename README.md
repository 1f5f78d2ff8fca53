# lvmlocalpv

Python models, builders and a Kubernetes API client for the custom resources
of an LVM-backed local persistent volume driver (API group
`local.openebs.io`, version `v1alpha1`).

The package covers three resources:

- `LVMVolume`: a logical volume requested on a node's volume group
- `LVMSnapshot`: a snapshot of an LVM volume
- `LVMNode`: the volume groups available on a node

## Installation

```
pip install lvmlocalpv
```

To run the test suite:

```
pip install "lvmlocalpv[test]"
pytest
```

## Resource models

`lvmlocalpv.apis` defines the resources as dataclasses. Each top-level kind
(`LVMVolume`, `LVMSnapshot`, `LVMNode` and their `...List` forms) converts to
and from the dictionaries used by the Kubernetes API with `to_dict()` and
`from_dict()`:

```python
from lvmlocalpv.apis import LVMVolume

vol = LVMVolume.from_dict(api_response)
print(vol.spec.vol_group, vol.status.state)
payload = vol.to_dict()
```

The list kinds support `len()` and iteration over their items.
`VolumeErrorCode` holds the known error codes (`Internal`,
`InsufficientCapacity`). `resource("lvmvolumes")` gives the group-qualified
`GroupResource`, and `known_kinds()` lists the kinds registered for the API
group.

## Builders

`lvmlocalpv.volbuilder`, `lvmlocalpv.snapbuilder` and `lvmlocalpv.nodebuilder`
each provide a `Builder`. A builder collects every validation error (a
missing name, namespace, capacity, volume group and so on) and reports them
together when `build()` is called, which raises `lvmlocalpv.apis.BuildError`;
its `errors` attribute holds the messages.

```python
from lvmlocalpv.volbuilder import Builder

volume = (
    Builder()
    .with_name("pvc-1234")
    .with_namespace("openebs")
    .with_capacity("5368709120")
    .with_vol_group("lvmvg")
    .with_owner_node("node-1")
    .with_labels({"app": "demo"})
    .with_finalizer(["lvm.openebs.io/finalizer"])
    .build()
)
```

`with_labels` merges into existing labels and `with_finalizer` appends to the
existing finalizers. `build_from(obj)` in each module starts a builder from an
existing object; given `None`, the builder records an error instead.

## Kubernetes client

`lvmlocalpv.kubeclient.volume_kubeclient()` returns a `Kubeclient` that
creates, reads, lists, updates and deletes `LVMVolume` resources in one
namespace. The connection is made on first use: from a kubeconfig file
(its current context) if a path is given, otherwise from the in-cluster
service account. A ready-made clientset may also be passed in.

```python
import os
from lvmlocalpv.kubeclient import volume_kubeclient

client = volume_kubeclient(
    namespace="openebs",
    kubeconfig_path=os.path.expanduser("~/.kube/config"),
)
vol = client.get("pvc-1234")
raw = client.get_raw("pvc-1234")   # JSON bytes
volumes = client.list()
client.delete("pvc-1234")          # foreground propagation
```

`Kubeclient` itself is generic: it takes the resource's plural name and its
item and list types, so the other kinds can be reached with, for example,
`Kubeclient("lvmsnapshots", LVMSnapshot, LVMSnapshotList, namespace="openebs")`.
Its error messages speak of volumes unless a `messages` mapping is given.

`RestClientset` is the underlying REST client, built with
`RestClientset.from_kubeconfig(path)` or `RestClientset.in_cluster()`.
Failures, including non-2xx responses, are raised as `KubeclientError`, whose
`status` attribute holds the HTTP status when there is one.

## Driver configuration

`lvmlocalpv.config.default()` returns an empty `Config` holding the driver
settings: driver name, plugin type, version, endpoint, node id, whether to set
IO limits, container runtime and the per-volume-group read/write IOPS and BPS
limits.

## What this package does not do

It is a library only. It has no command to run, no CSI driver or gRPC server,
and does not create or manage logical volumes itself; `Config` merely holds
settings. There are no ready-made client factories for snapshots or nodes
beyond constructing `Kubeclient` directly as shown above.
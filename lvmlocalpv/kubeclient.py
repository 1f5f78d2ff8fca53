"""Kubernetes API access for the local.openebs.io custom resources."""

from __future__ import annotations

import base64
import json
import os
import tempfile
from typing import Any, Callable

import requests
import yaml

from lvmlocalpv.apis import API_VERSION, LVMVolume, LVMVolumeList

_SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"

VOLUME_MESSAGES: dict[str, str] = {
    "create_nil": "failed to create csivolume: nil vol object",
    "create": "failed to create lvm volume {%s} in namespace {%s}",
    "get_missing": "failed to get lvm volume: missing lvm volume name",
    "get": "failed to get lvm volume {%s} in namespace {%s}",
    "get_raw_missing": "failed to get raw lvm volume: missing vol name",
    "get_raw": "failed to get lvm volume {%s} in namespace {%s}",
    "list": "failed to list lvm volumes in namespace {%s}",
    "delete_missing": "failed to delete csivolume: missing vol name",
    "delete": "failed to delete csivolume {%s} in namespace {%s}",
    "update_nil": "failed to update csivolume: nil vol object",
    "update": "failed to update csivolume {%s} in namespace {%s}",
}


class KubeclientError(Exception):
    """Raised when a Kubernetes API operation fails."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def _wrap(message: str, cause: BaseException) -> KubeclientError:
    return KubeclientError(f"{message}: {cause}", status=getattr(cause, "status", None))


def _write_temp(data: str) -> str:
    raw = base64.b64decode(data)
    with tempfile.NamedTemporaryFile(delete=False, suffix=".pem") as handle:
        handle.write(raw)
        return handle.name


def _named_entry(config: dict[str, Any], section: str, key: str, name: str | None) -> dict[str, Any]:
    for entry in config.get(section) or []:
        if entry.get("name") == name:
            return entry.get(key) or {}
    return {}


class RestClientset:
    """Minimal REST client for the custom resources of this API group."""

    def __init__(
        self,
        server: str,
        *,
        token: str | None = None,
        verify: bool | str = True,
        cert: tuple[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        session: Any = None,
        timeout: float = 30.0,
    ) -> None:
        self.server = server.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.session.verify = verify
        self.session.cert = cert
        self.session.auth = auth

    @classmethod
    def from_kubeconfig(cls, path: str) -> RestClientset:
        """Create a clientset from the current context of a kubeconfig file."""
        with open(path, encoding="utf-8") as handle:
            config = yaml.safe_load(handle) or {}
        base = os.path.dirname(os.path.abspath(path))

        def resolve(p: str) -> str:
            return p if os.path.isabs(p) else os.path.join(base, p)

        current = config.get("current-context")
        contexts = {c.get("name"): c.get("context") or {} for c in config.get("contexts") or []}
        if not current or current not in contexts:
            raise KubeclientError(f"invalid kubeconfig {path}: no current context")
        context = contexts[current]
        cluster = _named_entry(config, "clusters", "cluster", context.get("cluster"))
        user = _named_entry(config, "users", "user", context.get("user"))
        server = cluster.get("server")
        if not server:
            raise KubeclientError(f"invalid kubeconfig {path}: no server for context {current}")

        verify: bool | str = True
        if cluster.get("insecure-skip-tls-verify"):
            verify = False
        elif cluster.get("certificate-authority-data"):
            verify = _write_temp(cluster["certificate-authority-data"])
        elif cluster.get("certificate-authority"):
            verify = resolve(cluster["certificate-authority"])

        token = user.get("token")
        if not token and user.get("tokenFile"):
            with open(resolve(user["tokenFile"]), encoding="utf-8") as handle:
                token = handle.read().strip()

        cert = None
        if user.get("client-certificate-data") and user.get("client-key-data"):
            cert = (_write_temp(user["client-certificate-data"]), _write_temp(user["client-key-data"]))
        elif user.get("client-certificate") and user.get("client-key"):
            cert = (resolve(user["client-certificate"]), resolve(user["client-key"]))

        auth = None
        if user.get("username") and user.get("password"):
            auth = (user["username"], user["password"])

        return cls(server, token=token, verify=verify, cert=cert, auth=auth)

    @classmethod
    def in_cluster(cls) -> RestClientset:
        """Create a clientset from the pod's service account."""
        host = os.environ.get("KUBERNETES_SERVICE_HOST")
        port = os.environ.get("KUBERNETES_SERVICE_PORT")
        if not host or not port:
            raise KubeclientError(
                "unable to load in-cluster configuration, KUBERNETES_SERVICE_HOST "
                "and KUBERNETES_SERVICE_PORT must be defined"
            )
        try:
            with open(os.path.join(_SERVICE_ACCOUNT_DIR, "token"), encoding="utf-8") as handle:
                token = handle.read().strip()
        except OSError as err:
            raise _wrap("unable to read service account token", err) from err
        ca_path = os.path.join(_SERVICE_ACCOUNT_DIR, "ca.crt")
        verify: bool | str = ca_path if os.path.exists(ca_path) else True
        if ":" in host:
            host = f"[{host}]"
        return cls(f"https://{host}:{port}", token=token, verify=verify)

    def _url(self, plural: str, namespace: str, name: str = "") -> str:
        parts = [self.server, "apis", API_VERSION]
        if namespace:
            parts += ["namespaces", namespace]
        parts.append(plural)
        if name:
            parts.append(name)
        return "/".join(parts)

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = self.session.request(
                method, url, params=params or None, json=body, timeout=self.timeout
            )
        except requests.RequestException as err:
            raise _wrap(f"{method} {url} failed", err) from err
        if not 200 <= response.status_code < 300:
            message = response.text
            try:
                payload = response.json()
                if isinstance(payload, dict) and payload.get("message"):
                    message = payload["message"]
            except ValueError:
                pass
            raise KubeclientError(message, status=response.status_code)
        if method == "DELETE":
            return {}
        return response.json()

    def get(self, plural: str, name: str, namespace: str, opts: dict[str, Any] | None) -> dict[str, Any]:
        """Fetch one object."""
        return self._request("GET", self._url(plural, namespace, name), params=opts)

    def list(self, plural: str, namespace: str, opts: dict[str, Any] | None) -> dict[str, Any]:
        """List objects, across all namespaces when namespace is empty."""
        return self._request("GET", self._url(plural, namespace), params=opts)

    def create(self, plural: str, obj: dict[str, Any], namespace: str) -> dict[str, Any]:
        """Create an object."""
        return self._request("POST", self._url(plural, namespace), body=obj)

    def update(self, plural: str, obj: dict[str, Any], namespace: str) -> dict[str, Any]:
        """Replace an object."""
        name = (obj.get("metadata") or {}).get("name", "")
        return self._request("PUT", self._url(plural, namespace, name), body=obj)

    def delete(self, plural: str, name: str, namespace: str, opts: dict[str, Any] | None) -> None:
        """Delete an object."""
        body = {"apiVersion": "v1", "kind": "DeleteOptions", **(opts or {})}
        self._request("DELETE", self._url(plural, namespace, name), body=body)


class Kubeclient:
    """CRUD operations on one kind of custom resource in one namespace."""

    def __init__(
        self,
        plural: str,
        item_type: Any,
        list_type: Any,
        *,
        messages: dict[str, str] | None = None,
        namespace: str = "",
        kubeconfig_path: str = "",
        clientset: Any = None,
        get_clientset: Callable[[], Any] | None = None,
        get_clientset_for_path: Callable[[str], Any] | None = None,
    ) -> None:
        self.plural = plural
        self.item_type = item_type
        self.list_type = list_type
        self.messages = messages or VOLUME_MESSAGES
        self.namespace = namespace
        self.kubeconfig_path = kubeconfig_path
        self._clientset = clientset
        self._get_clientset = get_clientset or RestClientset.in_cluster
        self._get_clientset_for_path = get_clientset_for_path or RestClientset.from_kubeconfig

    def with_namespace(self, namespace: str) -> Kubeclient:
        """Operate on the given namespace from now on."""
        self.namespace = namespace
        return self

    def _client(self) -> Any:
        if self._clientset is not None:
            return self._clientset
        try:
            if self.kubeconfig_path:
                client = self._get_clientset_for_path(self.kubeconfig_path)
            else:
                client = self._get_clientset()
        except Exception as err:
            raise _wrap("failed to get clientset", err) from err
        self._clientset = client
        return client

    def _client_or_fail(self, message: str) -> Any:
        try:
            return self._client()
        except KubeclientError as err:
            raise _wrap(message, err) from err

    def create(self, obj: Any) -> Any:
        """Create the object in the cluster."""
        if obj is None:
            raise KubeclientError(self.messages["create_nil"])
        client = self._client_or_fail(
            self.messages["create"] % (obj.metadata.name, self.namespace)
        )
        return self.item_type.from_dict(client.create(self.plural, obj.to_dict(), self.namespace))

    def get(self, name: str, opts: dict[str, Any] | None = None) -> Any:
        """Return the object with the given name."""
        if not name:
            raise KubeclientError(self.messages["get_missing"])
        client = self._client_or_fail(self.messages["get"] % (name, self.namespace))
        return self.item_type.from_dict(client.get(self.plural, name, self.namespace, opts))

    def get_raw(self, name: str, opts: dict[str, Any] | None = None) -> bytes:
        """Return the object with the given name as JSON bytes."""
        if not name:
            raise KubeclientError(self.messages["get_raw_missing"])
        try:
            obj = self.get(name, opts)
        except KubeclientError as err:
            raise _wrap(self.messages["get_raw"] % (name, self.namespace), err) from err
        return json.dumps(obj.to_dict(), separators=(",", ":")).encode()

    def list(self, opts: dict[str, Any] | None = None) -> Any:
        """List the objects in the namespace."""
        client = self._client_or_fail(self.messages["list"] % (self.namespace,))
        return self.list_type.from_dict(client.list(self.plural, self.namespace, opts))

    def delete(self, name: str) -> None:
        """Delete the object with the given name, in the foreground."""
        if not name:
            raise KubeclientError(self.messages["delete_missing"])
        client = self._client_or_fail(self.messages["delete"] % (name, self.namespace))
        client.delete(self.plural, name, self.namespace, {"propagationPolicy": "Foreground"})

    def update(self, obj: Any) -> Any:
        """Replace the object in the cluster."""
        if obj is None:
            raise KubeclientError(self.messages["update_nil"])
        client = self._client_or_fail(
            self.messages["update"] % (obj.metadata.name, obj.metadata.namespace)
        )
        return self.item_type.from_dict(client.update(self.plural, obj.to_dict(), self.namespace))


def volume_kubeclient(
    namespace: str = "",
    kubeconfig_path: str = "",
    clientset: Any = None,
) -> Kubeclient:
    """Return a client for LVMVolume resources."""
    return Kubeclient(
        "lvmvolumes",
        LVMVolume,
        LVMVolumeList,
        messages=VOLUME_MESSAGES,
        namespace=namespace,
        kubeconfig_path=kubeconfig_path,
        clientset=clientset,
    )
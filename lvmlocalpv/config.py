"""Driver configuration filled from request or user input."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Config:
    """Parameters of a driver instance."""

    # name registered with CSI
    driver_name: str = ""
    # whether this is a node or controller plugin
    plugin_type: str = ""
    version: str = ""
    # unix socket the plugin listens on
    endpoint: str = ""
    node_id: str = ""
    # set iops/bps limits on pods using volumes provisioned on this node
    set_io_limits: bool = False
    # container runtime used on the node, to locate pod cgroups
    container_runtime: str = ""
    # per-GB rate limits per volume group prefix, as "prefix=value" items
    riops_limit_per_gb: list[str] = field(default_factory=list)
    wiops_limit_per_gb: list[str] = field(default_factory=list)
    rbps_limit_per_gb: list[str] = field(default_factory=list)
    wbps_limit_per_gb: list[str] = field(default_factory=list)


def default() -> Config:
    """Return a new configuration with every field at its zero value."""
    return Config()
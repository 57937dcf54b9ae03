from __future__ import annotations

import os
from enum import Enum
from typing import Iterable, Mapping

K3S_KUBECONFIG_PATH = "/etc/rancher/k3s/k3s.yaml"
K3S_NODE_TOKEN_PATH = "/var/lib/rancher/k3s/server/node-token"
DEFAULT_STATUS_PATHS = (K3S_KUBECONFIG_PATH, K3S_NODE_TOKEN_PATH)


class NodeStatus(str, Enum):
    READY = "ready"
    NOT_READY = "not ready"

    def __str__(self) -> str:
        return self.value


def render_manifest(mapping: Mapping[str, str]) -> str:
    """Render ``key: "value"`` lines in insertion order.

    Values are emitted verbatim inside the quotes; callers escape them first
    when needed.
    """
    return "".join(f'{key}: "{value}"\n' for key, value in mapping.items())


def get_status(paths: Iterable[str] | None = None) -> NodeStatus:
    """Coarse local readiness: every marker file must exist."""
    markers = list(DEFAULT_STATUS_PATHS if paths is None else paths)
    if not markers:
        return NodeStatus.NOT_READY
    if all(os.path.exists(path) for path in markers):
        return NodeStatus.READY
    return NodeStatus.NOT_READY

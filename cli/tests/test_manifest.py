from __future__ import annotations

from nodejoin_client import manifest
from nodejoin_client.manifest import NodeStatus, get_status, render_manifest


def test_render_manifest_keeps_order_and_does_not_escape() -> None:
    content = render_manifest({"a": "b", "b": '"c"'})

    assert content == 'a: "b"\nb: ""c""\n'


def test_render_manifest_insertion_order() -> None:
    mapping = {"zeta": "1", "alpha": "2", "mid": "3"}

    assert [line.split(":")[0] for line in render_manifest(mapping).splitlines()] == ["zeta", "alpha", "mid"]


def test_render_manifest_empty() -> None:
    assert render_manifest({}) == ""


def test_get_status_ready_when_all_markers_exist(tmp_path) -> None:
    kubeconfig = tmp_path / "k3s.yaml"
    token = tmp_path / "node-token"
    kubeconfig.write_text("apiVersion: v1\n", encoding="utf-8")
    token.write_text("secret\n", encoding="utf-8")

    assert get_status([str(kubeconfig), str(token)]) is NodeStatus.READY


def test_get_status_not_ready_when_marker_missing(tmp_path) -> None:
    kubeconfig = tmp_path / "k3s.yaml"
    kubeconfig.write_text("apiVersion: v1\n", encoding="utf-8")

    status = get_status([str(kubeconfig), str(tmp_path / "missing")])

    assert status is NodeStatus.NOT_READY
    assert str(status) == "not ready"


def test_get_status_without_markers_is_not_ready() -> None:
    assert get_status([]) is NodeStatus.NOT_READY


def test_get_status_uses_default_markers(tmp_path, monkeypatch) -> None:
    marker = tmp_path / "marker"
    marker.write_text("", encoding="utf-8")
    monkeypatch.setattr(manifest, "DEFAULT_STATUS_PATHS", (str(marker),))

    assert get_status() is NodeStatus.READY

from unittest.mock import patch

import pytest
from kubernetes.client import CoreV1Api

from ephemeral_storage_exporter.config import Config
from ephemeral_storage_exporter.core_k8s import load_kube_client, stats_summary_path


def create_config(in_cluster: bool) -> Config:
    return Config(
        node_name="node-a",
        scrape_interval=15,
        in_cluster=in_cluster,
        metrics_port=9100,
        log_level="info",
        kubeconfig="/tmp/kubeconfig",
    )


@pytest.mark.unit
def test_stats_summary_path():
    assert stats_summary_path("node-a") == "/api/v1/nodes/node-a/proxy/stats/summary"


@pytest.mark.unit
def test_load_kube_client_in_cluster():
    with (
        patch("ephemeral_storage_exporter.core_k8s.config.load_incluster_config") as mock_incluster,
        patch("ephemeral_storage_exporter.core_k8s.config.load_kube_config") as mock_kubeconfig,
    ):
        api = load_kube_client(create_config(in_cluster=True))

    mock_incluster.assert_called_once_with()
    mock_kubeconfig.assert_not_called()
    assert isinstance(api, CoreV1Api)


@pytest.mark.unit
def test_load_kube_client_from_kubeconfig():
    with (
        patch("ephemeral_storage_exporter.core_k8s.config.load_incluster_config") as mock_incluster,
        patch("ephemeral_storage_exporter.core_k8s.config.load_kube_config") as mock_kubeconfig,
    ):
        load_kube_client(create_config(in_cluster=False))

    mock_incluster.assert_not_called()
    mock_kubeconfig.assert_called_once_with(config_file="/tmp/kubeconfig")

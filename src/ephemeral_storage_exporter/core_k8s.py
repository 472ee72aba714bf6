import logging

from kubernetes import client, config
from kubernetes.client import CoreV1Api

from .config import Config

logger = logging.getLogger(__name__)

STATS_SUMMARY_PROXY_PATH = "stats/summary"


def stats_summary_path(node_name: str) -> str:
    return f"/api/v1/nodes/{node_name}/proxy/{STATS_SUMMARY_PROXY_PATH}"


def load_kube_client(cfg: Config) -> CoreV1Api:
    """
    Resolve credentials and build a CoreV1Api client.

    In-cluster credentials are used when ``cfg.in_cluster`` is set, otherwise
    the kubeconfig file named by ``cfg.kubeconfig``.

    Raises:
        kubernetes.config.ConfigException: If no usable credentials are found
    """
    if cfg.in_cluster:
        config.load_incluster_config()
        logger.debug("Loaded in-cluster credentials")
    else:
        config.load_kube_config(config_file=cfg.kubeconfig)
        logger.debug(f"Loaded credentials from kubeconfig {cfg.kubeconfig}")
    return client.CoreV1Api()

import logging

from kubernetes.client import CoreV1Api
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from .core import NodeStatsSnapshot, parse_stats_summary
from .core_k8s import STATS_SUMMARY_PROXY_PATH, stats_summary_path
from .metrics import EphemeralStorageGauge

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The stats summary of a node could not be retrieved."""

    def __init__(self, node_name: str, cause: object):
        self.node_name = node_name
        self.cause = cause
        super().__init__(f"Failed to fetch stats summary for node {node_name!r}: {cause}")


def fetch_stats_summary(api: CoreV1Api, node_name: str) -> bytes:
    """
    Fetch the raw kubelet stats summary of a node through the API server proxy.

    Args:
        api: Kubernetes CoreV1Api instance
        node_name: Name of the node to query

    Returns:
        The undecoded response body

    Raises:
        FetchError: If the node name is empty or the request fails
    """
    if not node_name:
        raise FetchError(node_name, "node name is empty, set CURRENT_NODE_NAME")
    try:
        response = api.connect_get_node_proxy_with_path(
            name=node_name,
            path=STATS_SUMMARY_PROXY_PATH,
            _preload_content=False,
        )
        content = response.data
        response.release_conn()
    except ApiException as e:
        raise FetchError(node_name, f"{e.status} {e.reason}") from e
    except (HTTPError, OSError) as e:
        raise FetchError(node_name, e) from e
    logger.debug(f"Fetched proxy stats from {stats_summary_path(node_name)}")
    return content


def execute_sampling_loop(
    api: CoreV1Api,
    node_name: str,
    gauge: EphemeralStorageGauge,
) -> NodeStatsSnapshot:
    """
    Execute one sampling cycle: fetch, parse and publish.

    Args:
        api: Kubernetes CoreV1Api instance
        node_name: Node whose pods are sampled
        gauge: Publisher receiving the new snapshot

    Raises:
        FetchError: If the stats summary could not be fetched
    """
    raw = fetch_stats_summary(api, node_name)
    snapshot = parse_stats_summary(raw)
    gauge.publish(snapshot)
    logger.debug(f"Published usage for {len(snapshot.pods)} pods on node {snapshot.node_name}")
    return snapshot

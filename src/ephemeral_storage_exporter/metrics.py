import logging

from prometheus_client import CollectorRegistry, Gauge, start_http_server

from .core import NodeStatsSnapshot

logger = logging.getLogger(__name__)

METRIC_NAME = "ephemeral_storage_pod_usage"
METRIC_HELP = "Used to expose Ephemeral Storage metrics for pod"
LABEL_NAMES = ("pod_name", "node_name")


class EphemeralStorageGauge:
    """
    Owns the ``ephemeral_storage_pod_usage`` gauge family.

    The gauge is registered in the given registry rather than the process-wide
    default, so each instance can be exercised on its own.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.gauge = Gauge(METRIC_NAME, METRIC_HELP, labelnames=LABEL_NAMES, registry=self.registry)

    def publish(self, snapshot: NodeStatsSnapshot) -> None:
        """Replace every series with the usage found in ``snapshot``."""
        self.gauge.clear()
        for pod in snapshot.pods:
            self.gauge.labels(pod_name=pod.pod_name, node_name=snapshot.node_name).set(pod.used_bytes)
            logger.debug(f"pod {pod.pod_name} on {snapshot.node_name} with usedBytes: {pod.used_bytes}")

    def samples(self) -> dict[tuple[str, str], float]:
        return {
            (sample.labels["pod_name"], sample.labels["node_name"]): sample.value
            for metric in self.gauge.collect()
            for sample in metric.samples
        }


def start_metrics_server(port: int, registry: CollectorRegistry) -> None:
    """
    Serve ``registry`` over HTTP on a daemon thread.

    Raises:
        OSError: If the port cannot be bound
    """
    start_http_server(port, registry=registry)
    logger.info(f"Serving metrics on :{port}/metrics")

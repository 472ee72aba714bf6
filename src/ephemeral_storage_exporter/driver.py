import logging
import sys
import time
from collections.abc import Sequence

from kubernetes.client import CoreV1Api
from kubernetes.config import ConfigException

from .api_components import FetchError, execute_sampling_loop
from .config import Config, ConfigError
from .core_k8s import load_kube_client
from .metrics import EphemeralStorageGauge, start_metrics_server

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(pathname)s:%(lineno)d %(message)s"


def setup_logging(level: int) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def run(cfg: Config, api: CoreV1Api, gauge: EphemeralStorageGauge) -> None:
    """
    Sample the node forever, sleeping ``cfg.scrape_interval`` seconds between cycles.

    A failed fetch ends the process with exit status 1; there is no retry, so
    recovery is left to the pod restart policy.
    """
    try:
        while True:
            try:
                execute_sampling_loop(api, cfg.node_name, gauge)
            except FetchError as e:
                logger.error(f"ErrorBadRequest: {e}")
                sys.exit(1)
            time.sleep(cfg.scrape_interval)
    except KeyboardInterrupt:
        logger.info(f"Exporter for node {cfg.node_name} shutting down...")
        sys.exit(0)


def main(argv: Sequence[str] | None = None) -> None:
    """
    Read the configuration, start the metrics endpoint and run the sampling loop.
    Every startup failure exits with status 1.
    The sampling loop runs on the main thread so a failed fetch can end the
    process; the metrics endpoint is served from a daemon thread.
    """
    try:
        cfg = Config.from_env(argv=sys.argv[1:] if argv is None else argv)
    except ConfigError as e:
        setup_logging(logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(cfg.logging_level)

    try:
        api = load_kube_client(cfg)
    except ConfigException as e:
        logger.error(f"Failed to load Kubernetes credentials (in_cluster={cfg.in_cluster}): {e}")
        sys.exit(1)

    gauge = EphemeralStorageGauge()
    try:
        start_metrics_server(cfg.metrics_port, gauge.registry)
    except OSError as e:
        logger.error(f"Listener failed: {e}")
        sys.exit(1)

    logger.info(
        f"Exporting ephemeral storage usage of node {cfg.node_name!r} every {cfg.scrape_interval}s "
        f"on port {cfg.metrics_port}"
    )
    run(cfg, api, gauge)


if __name__ == "__main__":
    main()

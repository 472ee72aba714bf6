import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

DEFAULT_IN_CLUSTER = "true"
DEFAULT_SCRAPE_INTERVAL = "15"
DEFAULT_METRICS_PORT = "9100"
DEFAULT_LOG_LEVEL = "info"

# zerolog level names accepted by LOG_LEVEL, mapped onto the logging module
LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "disabled": logging.CRITICAL + 10,
}


class ConfigError(ValueError):
    """Raised when the environment or command line holds an unusable value."""


@dataclass(frozen=True)
class Config:
    node_name: str
    scrape_interval: int
    in_cluster: bool
    metrics_port: int
    log_level: str
    kubeconfig: str | None = None

    @property
    def logging_level(self) -> int:
        return parse_log_level(self.log_level)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, argv: Sequence[str] = ()) -> "Config":
        """
        Build the configuration from environment variables and command line flags.

        Args:
            environ: Environment mapping, defaults to os.environ
            argv: Command line arguments without the program name

        Raises:
            ConfigError: If a value cannot be parsed
        """
        if environ is None:
            environ = os.environ
        args = build_parser().parse_args(list(argv))

        log_level = environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
        parse_log_level(log_level)

        scrape_interval = parse_int("SCRAPE_INTERVAL", environ.get("SCRAPE_INTERVAL", DEFAULT_SCRAPE_INTERVAL))
        if scrape_interval < 0:
            raise ConfigError(f"SCRAPE_INTERVAL must not be negative, got {scrape_interval}")

        metrics_port = parse_int("METRICS_PORT", environ.get("METRICS_PORT", DEFAULT_METRICS_PORT))
        if not 0 <= metrics_port <= 65535:
            raise ConfigError(f"METRICS_PORT must be between 0 and 65535, got {metrics_port}")

        return cls(
            node_name=environ.get("CURRENT_NODE_NAME", ""),
            scrape_interval=scrape_interval,
            in_cluster=environ.get("IN_CLUSTER", DEFAULT_IN_CLUSTER).lower() == "true",
            metrics_port=metrics_port,
            log_level=log_level,
            kubeconfig=args.kubeconfig,
        )


def default_kubeconfig() -> str | None:
    home = os.path.expanduser("~")
    if not home or home == "~":
        return None
    return os.path.join(home, ".kube", "config")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ephemeral-storage-exporter",
        description="Export per-pod ephemeral storage usage of the current node as Prometheus metrics.",
    )
    parser.add_argument(
        "-kubeconfig",
        "--kubeconfig",
        dest="kubeconfig",
        default=default_kubeconfig(),
        help="(optional) absolute path to the kubeconfig file, used when IN_CLUSTER is not true",
    )
    return parser


def parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def parse_log_level(name: str) -> int:
    try:
        return LOG_LEVELS[name.strip().lower()]
    except KeyError:
        raise ConfigError(f"Unknown LOG_LEVEL {name!r}") from None

import json
import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class PodUsage:
    pod_name: str
    used_bytes: float


@dataclass
class NodeStatsSnapshot:
    """Ephemeral storage usage of every pod on one node, as seen by a single fetch."""

    node_name: str
    pods: list[PodUsage] = field(default_factory=list)


def _get_mapping(obj: Any, key: str) -> dict:
    value = obj.get(key) if isinstance(obj, dict) else None
    return value if isinstance(value, dict) else {}


def _get_str(obj: dict, key: str) -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _get_float(obj: dict, key: str) -> float:
    value = obj.get(key)
    # bool is an int subclass but never a byte count
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    return 0.0


def parse_pod_usage(entry: Any) -> PodUsage:
    pod_ref = _get_mapping(entry, "podRef")
    storage = _get_mapping(entry, "ephemeral-storage")
    return PodUsage(pod_name=_get_str(pod_ref, "name"), used_bytes=_get_float(storage, "usedBytes"))


def parse_stats_summary(raw: bytes | str) -> NodeStatsSnapshot:
    """
    Reduce a kubelet stats summary document to per-pod ephemeral storage usage.

    Decoding is lenient: anything that cannot be read falls back to an empty
    node name, an empty pod list, or a zero usage, and no exception escapes.
    Every element of ``pods`` yields exactly one entry, in input order.

    Args:
        raw: Body returned by the node proxy stats/summary endpoint

    Returns:
        NodeStatsSnapshot with whatever could be recovered from the payload
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Could not decode stats summary payload: {e}")
        return NodeStatsSnapshot(node_name="")

    if not isinstance(data, dict):
        logger.warning(f"Stats summary payload is a {type(data).__name__}, expected an object")
        return NodeStatsSnapshot(node_name="")

    node_name = _get_str(_get_mapping(data, "node"), "nodeName")
    pods = data.get("pods")
    if pods is None:
        return NodeStatsSnapshot(node_name=node_name)
    if not isinstance(pods, list):
        logger.warning(f"Stats summary 'pods' is a {type(pods).__name__}, expected a list")
        return NodeStatsSnapshot(node_name=node_name)

    return NodeStatsSnapshot(node_name=node_name, pods=[parse_pod_usage(entry) for entry in pods])

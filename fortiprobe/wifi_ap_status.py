"""Wireless access point status probe."""

from __future__ import annotations

from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

_PATH = "api/v2/monitor/wifi/ap_status"

ACCESS_POINTS = Desc(
    "fortigate_wifi_access_points",
    "Number of connected access points by status",
    ("vdom", "status"),
)
FABRIC_CLIENTS = Desc(
    "fortigate_wifi_fabric_clients", "Number of connected clients", ("vdom",)
)
FABRIC_MAX_CLIENTS = Desc(
    "fortigate_wifi_fabric_max_allowed_clients",
    "Maximum number of clients which are allowed to connect",
    ("vdom",),
)

# Access point states reported, keyed by the API field that holds their count.
_AP_STATES = (
    ("wtp_active", "active"),
    ("wtp_down", "down"),
    ("wtp_rebooted", "rebooting"),
)


def probe_wifi_ap_status(client: FortiClient, meta: Any = None) -> list[Metric]:
    """Report access point counts by state and client counts per VDOM."""
    response = fetch(client, _PATH, "vdom=*")
    if not isinstance(response, list):
        raise ProbeError(f"{_PATH}: expected a list of VDOM results")

    metrics: list[Metric] = []
    for entry in response:
        vdom = entry.get("vdom", "")
        results = entry.get("results") or {}
        for field, state in _AP_STATES:
            metrics.append(
                ACCESS_POINTS.new_metric(
                    ValueType.GAUGE, results.get(field, 0), vdom, state
                )
            )
        metrics.append(
            FABRIC_CLIENTS.new_metric(
                ValueType.GAUGE, results.get("client_count", 0), vdom
            )
        )
        metrics.append(
            FABRIC_MAX_CLIENTS.new_metric(
                ValueType.GAUGE, results.get("client_count_max", 0), vdom
            )
        )
    return metrics
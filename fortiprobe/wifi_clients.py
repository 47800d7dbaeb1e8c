"""Wireless client probe."""

from __future__ import annotations

from typing import Any

from .metrics import Desc, FortiClient, Metric, ProbeError, ValueType, fetch

_PATH = "api/v2/monitor/wifi/client"
# Only the first 1000 entries are requested; the API is not paged through.
_QUERY = "vdom=*&start=0&count=1000"

_MAC_LABELS = ("vdom", "mac")

CLIENT_INFO = Desc(
    "fortigate_wifi_client_info",
    "Number of connected access points by status",
    ("vdom", "mac", "hostname", "wtp_name"),
)
DATA_RATE = Desc(
    "fortigate_wifi_client_data_rate_bps", "Data rate of the client connection", _MAC_LABELS
)
BANDWIDTH_RX = Desc(
    "fortigate_wifi_client_bandwidth_rx_bps", "Bandwidth for receiving traffic", _MAC_LABELS
)
BANDWIDTH_TX = Desc(
    "fortigate_wifi_client_bandwidth_tx_bps", "Bandwidth for transmitting traffic", _MAC_LABELS
)
SIGNAL_STRENGTH = Desc(
    "fortigate_wifi_client_signal_strength_dBm",
    "Signal strength of the connected client",
    _MAC_LABELS,
)
SIGNAL_NOISE = Desc(
    "fortigate_wifi_client_signal_noise_dBm",
    "Signal noise on the frequency of the client",
    _MAC_LABELS,
)
TX_DISCARD = Desc(
    "fortigate_wifi_client_tx_discard_ratio", "Percentage of discarded packets", _MAC_LABELS
)
TX_RETRIES = Desc(
    "fortigate_wifi_client_tx_retries_ratio",
    "Percentage of retried connection to all connection attempts",
    _MAC_LABELS,
)

# Gauges taken straight from a client entry: (descriptor, field, divisor).
_GAUGES = (
    (DATA_RATE, "data_rate_bps", 1),
    (BANDWIDTH_RX, "bandwidth_rx", 1),
    (BANDWIDTH_TX, "bandwidth_tx", 1),
    (SIGNAL_STRENGTH, "signal", 1),
    (SIGNAL_NOISE, "noise", 1),
    (TX_DISCARD, "tx_discard_percentage", 100),
    (TX_RETRIES, "tx_retry_percentage", 100),
)


def probe_wifi_clients(client: FortiClient, meta: Any = None) -> list[Metric]:
    """Report information, rates, signal and error ratios of every wireless client."""
    response = fetch(client, _PATH, _QUERY)
    if not isinstance(response, list):
        raise ProbeError(f"{_PATH}: expected a list of VDOM results")

    metrics: list[Metric] = []
    for entry in response:
        vdom = entry.get("vdom", "")
        for result in entry.get("results") or []:
            mac = result.get("mac", "")
            metrics.append(
                CLIENT_INFO.new_metric(
                    ValueType.COUNTER,
                    1,
                    vdom,
                    mac,
                    result.get("hostname", ""),
                    result.get("wtp_name", ""),
                )
            )
            metrics.extend(
                desc.new_metric(
                    ValueType.GAUGE, float(result.get(field, 0)) / divisor, vdom, mac
                )
                for desc, field, divisor in _GAUGES
            )
    return metrics
"""Prometheus metrics from FortiGate VPN, web UI and Wi-Fi monitor responses."""

__version__ = "0.1.0"

__all__ = [
    "metrics",
    "vpn_ipsec",
    "vpn_ssl",
    "vpn_ssl_stats",
    "webui_state",
    "wifi_ap_status",
    "wifi_clients",
]
"""ingress2haproxy: render HAProxy configuration from ingress snapshots."""

__version__ = "0.1.0"

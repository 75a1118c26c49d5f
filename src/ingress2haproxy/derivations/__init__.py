"""Derivations: build the HAProxy model from an ingress snapshot."""

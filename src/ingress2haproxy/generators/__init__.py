"""Generators: render the HAProxy model into configuration text."""

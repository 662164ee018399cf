"""Subsector generator: hex-map star systems with editable world profiles."""

__version__ = "1.0.0"

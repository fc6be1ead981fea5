"""Controller, parameter tables, tempo sync and preset types for a two-layer synthesizer."""

__version__ = "0.0.4"

__all__ = ["backend", "controller", "domain", "events", "model", "params", "preset", "sync"]
"""promboard - Prometheus query broker and node dashboard synthesizer."""

__version__ = "0.1.0"

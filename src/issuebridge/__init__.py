"""IssueBridge - Forwards host events to external issue trackers and renders board cards."""

__version__ = "0.1.0"

"""Terminal profiles: colours, fonts, property specs, an in-memory settings store and screen container state."""

__version__ = "0.1.0"
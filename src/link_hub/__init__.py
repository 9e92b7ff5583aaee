"""Link hub: validation, event durations and changelog diffing for a static link collection."""

__version__ = "0.1.0"

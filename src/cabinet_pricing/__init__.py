"""Cabinet pricing engine for a made-to-order kitchen-cabinet storefront."""

__version__ = "1.0.0"

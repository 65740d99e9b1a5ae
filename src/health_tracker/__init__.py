"""health-tracker: personal body, nutrition and training log."""

__version__ = "0.1.0"

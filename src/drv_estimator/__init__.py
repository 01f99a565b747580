"""DRV Estimator - statutory German pension estimates."""

__version__ = "0.1.0"

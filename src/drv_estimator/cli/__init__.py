"""Command line interface for DRV Estimator."""

"""Core pension domain: models, statutory rules and calculators."""

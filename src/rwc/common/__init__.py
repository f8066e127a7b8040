"""Models, errors, configuration and logging shared across layers."""

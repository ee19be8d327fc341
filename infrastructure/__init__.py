"""Infrastructure adapters (external services) for SmartGrow."""

"""Bootstrap wiring: selects adapters and builds services."""

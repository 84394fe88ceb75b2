"""Domain layer: models, errors and pure lifecycle rules."""

"""Domain layer: pure calculators and value objects."""

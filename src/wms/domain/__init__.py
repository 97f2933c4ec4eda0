"""Domain layer: value objects, aggregates, events and repository contracts."""

"""Domain layer: entities, attendance state machine and repository ports."""

"""Domain layer: routing models and pathfinding services."""

"""Domain layer: menu models, rules, errors and ports."""

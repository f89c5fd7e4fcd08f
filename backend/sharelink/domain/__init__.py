"""
Domain layer: entities, value objects and ports with no infrastructure dependencies.
"""

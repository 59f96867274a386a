"""Domain layer: document kinds, front-matter models, and parsing rules.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""

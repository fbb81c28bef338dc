"""Domain layer: marketplace rules, money arithmetic and planar geometry.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

"""Domain layer — service specs, statuses, and schedule resolution.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

"""Pure domain layer: calendar arithmetic, cadence types and recurrence rules.

This layer depends only on stdlib and pydantic.
It must never import from services, output, commands, or config.
"""

"""Domain layer — account numbers, money, errors, and the account model.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

"""Service layer — identifier generation, ledger rules, and the CLI façade.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""

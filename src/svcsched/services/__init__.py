"""Service layer — scheduling and transition logic returning results.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""

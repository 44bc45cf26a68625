"""Infrastructure layer — service manager backends and the wall clock.

This layer depends on stdlib only (``subprocess``, ``time``).
It must never import from services, commands, or output.
"""

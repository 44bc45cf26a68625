"""Built-in plugins shipped with svcsched."""

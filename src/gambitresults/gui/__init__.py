"""Qt bindings for Gambit Results.

Importing this package requires PyQt6.
"""

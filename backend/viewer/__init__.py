"""
Map session state and layer loading.

A `MapSession` is the one place live map state is kept; it is created per app (or
per test) and passed around explicitly.
"""

"""
models/ - Domain Models
=======================
Plain dataclasses persisted one row per entity by the DAOs in `repositories/`.
"""

"""Domain layer for Kitchen Harmony.

Business rules for meal plans and users, decoupled from the REST surface
and from the persistence and identity infrastructure.
"""

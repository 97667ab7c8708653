"""
Shared Kernel

Base classes and utilities shared by the areas, reservations and
notifications contexts: domain events, value objects, domain errors,
the unit of work and the in-process message bus.
"""

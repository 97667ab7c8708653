"""Shared amenities (áreas comuns) of a condominium and their booking rules."""

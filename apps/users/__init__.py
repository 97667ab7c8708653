"""Users app package.

Holds the custom user model (email login, role, condominium reference)
consumed by the booking contexts as the authenticated actor.
"""

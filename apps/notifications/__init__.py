"""Notifications app package.

Stores in-app notifications and delivers them as Expo push messages
through Celery. Reservation events reach it through the message bus.
"""

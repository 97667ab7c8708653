"""
Reservation domain

Pure rules with no database access:
- status: reservation lifecycle and its transition table
- events: facts published after a booking transaction commits
- availability: per-day availability of an area for a month
"""

"""Reservations of shared areas: ledger, approval workflow and availability."""

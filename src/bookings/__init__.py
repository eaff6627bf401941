"""
Booking Module

Seat booking for scheduled buses: creating a booking reserves seats on the
bus in the same transaction, cancelling one applies the refund policy and
releases the seats.

Key Components:
- booking_service.py: booking lifecycle (create, cancel, queries)
- refund_policy.py: refund amount as a function of time to departure
- router.py: FastAPI endpoints under /bookings
- schemas.py: Pydantic models and status enumerations
"""

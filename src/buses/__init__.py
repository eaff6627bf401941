"""
Bus Module

Bus trips (operator, route, schedule, fare) and their seat inventory.
Seat reservation and release are single conditional UPDATEs so the
available-seat counter never goes below zero under concurrent bookings.
"""

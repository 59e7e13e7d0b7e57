"""
Core building blocks shared by the scheduler.

Components:
- clock.py: monotonic tick clock with a switchable resolution
- events.py: tiny event emitter used for lifecycle signals
- ports.py: Protocols for the host turn primitive and callbacks
"""

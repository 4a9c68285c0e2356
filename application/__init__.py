"""
Application Layer for the Gym Tracker session API.

This package contains:
- ports/: Abstract collaborator interfaces (store, catalog, live status)
- services/: The session clock and the workout session manager
- errors.py: Exceptions raised across the application boundary
"""

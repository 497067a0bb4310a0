"""
Client Application package.

An HTTP wrapper around the data service, a view-model holding the per-session
UI state, and a console front-end driving both.
"""

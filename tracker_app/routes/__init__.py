"""
Routes package for the task tracker.

- api: JSON endpoints for registration, login, and task CRUD
"""

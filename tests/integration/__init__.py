"""
Integration tests for the task tracker HTTP API.

Tests use the Flask test client and cover:
- Registration and login
- Task CRUD operations
- Access-gate rejections
"""

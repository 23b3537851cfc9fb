"""
Test suite for the task tracker service.

This package contains:
- unit/: store, token, access-gate and config tests with no HTTP layer
- integration/: full request/response tests through the Flask test client
"""

"""
Test suite for the SpendWise UI harness.

This package contains:
- unit/: Fast tests of the harness against in-memory page fakes
- e2e/: The ordered browser journey against a running SpendWise app
- mocks/: In-memory stand-ins for the browser driver
"""

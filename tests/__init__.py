"""Test suite for calface.

Test Structure:
- unit/: Unit tests for individual components, one directory per package
- integration/: Refresh cycles run end to end against an event file
- fixtures/: Event builders and sample event files
- conftest.py: Shared fixtures
"""

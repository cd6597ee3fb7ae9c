"""
Test suite for safe-tx-proposer

Contains:
- tests/unit/          : Unit tests for individual modules (no network)
- tests/conftest.py    : FakeSession and shared service fixtures
"""

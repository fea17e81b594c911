"""
Test suite for morpho-helper

Contains:
- tests/unit/          : Unit tests for individual modules (in-memory ledger/vault fakes)
"""

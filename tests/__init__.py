"""
Test suite for multisend-ledger

Contains:
- tests/unit/          : Unit tests for domain models, stages, calculator and CLI
"""

"""
Test suite for the fee-decay ledger

Contains:
- tests/unit/          : Unit tests for math, fee engine, gatekeeper and FeeToken
"""

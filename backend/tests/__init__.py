"""
Tests package for the ShareLink backend.

This package contains test suites organized by type:
- unit/: Fast tests with in-memory or mocked collaborators
- property/: Property-based tests using Hypothesis
- integration/: Concurrency and application wiring tests
- e2e/: End-to-end HTTP workflows
"""

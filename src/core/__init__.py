"""
Core domain models, exact math primitives, and JSON contracts.

This module contains the foundational building blocks that are independent
of external systems (ledgers, chains, storage).
"""

"""Domain models and types for famfin.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Ledger logic separated from infrastructure
"""

from famfin.domain.models import Category, Description, IncomeSource, Money, PaymentMethod

__all__ = ["Money", "Description", "IncomeSource", "Category", "PaymentMethod"]

"""Domain type definitions for famfin.

These NewTypes and enums provide semantic clarity and help with type checking:
- Money: Amount in currency units (float, e.g. 1234.56)
- Description: Expense description text
- IncomeSource: Name of an income contribution (e.g. "fixed_salary")
- Category: One of the three 50/30/20 budget categories
- PaymentMethod: How an expense was paid
"""

from enum import Enum
from typing import NewType

# Money amounts are kept in currency units; installments divide without rounding
Money = NewType("Money", float)

# Expense description text
Description = NewType("Description", str)

# Named income contribution
IncomeSource = NewType("IncomeSource", str)


class Category(str, Enum):
    """Budget category of an expense."""

    ESSENTIAL = "essential"
    DESIRE = "desire"
    INVESTMENT = "investment"


class PaymentMethod(str, Enum):
    """Payment method of an expense."""

    CREDIT = "credit"
    DEBIT = "debit"
    PIX = "pix"
    CASH = "cash"
    TRANSFER = "transfer"

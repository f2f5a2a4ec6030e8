"""
Standard type definitions for database models.

Provides consistent types for monetary fields across all models.
"""

from sqlalchemy import Numeric

# Standard money type for amounts, balances, rewards
# Precision: 18 digits total, 2 after decimal point
MoneyType = Numeric(18, 2, asdecimal=True)

"""
Household Finance Tracker - Source Package

Backend for a household finance tracker. Users record salaries, expenses,
investments and activities per month, keep a list of household members,
and track two savings funds.

DESIGN PRINCIPLES:
1. Every document belongs to exactly one user
2. Identity and persistence are delegated to managed services
3. Reject malformed input, never store NaN
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Household Finance Tracker Team"

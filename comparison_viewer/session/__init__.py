"""
Session module.

Provides ComparisonSession, which owns the comparison state for one viewing
session of one patient.
"""

from .comparison_session import ComparisonSession

__all__ = ['ComparisonSession']

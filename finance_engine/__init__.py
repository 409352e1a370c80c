"""
Finance Engine

The domain core of a personal finance tracker: recurring obligation
scheduling and budget accounting.

DESIGN PRINCIPLES:
1. Pure computation over immutable values
2. The caller supplies "today", the engine never reads a clock
3. Fail early, fail visibly (no partial results)
4. Rounding policy is fixed for parity with historical reports
5. Storage and presentation live outside the engine
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"

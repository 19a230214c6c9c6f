"""Kernel value types – public re-export surface.

Modules:
  currency.py – CurrencyCode
  naming.py   – NamingConvention
"""

from mp_search.kernel.types.currency import CurrencyCode
from mp_search.kernel.types.naming import NamingConvention

__all__ = ["CurrencyCode", "NamingConvention"]

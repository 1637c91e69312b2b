"""Book lending registry.

An owner catalogs books with copy counts; other accounts borrow and
return copies.
"""

__version__ = "0.1.0"

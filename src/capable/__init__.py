"""CAPABLE

Business actions written against the minimal capability they need.
Each action declares the storage operations it calls as its own protocol,
so production storage and recording test doubles are interchangeable.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

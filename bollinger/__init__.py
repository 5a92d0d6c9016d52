"""Bollinger Bands indicator engine.

The ``models`` and ``indicators`` subpackages are pure computation with no
I/O. ``config``, ``loader``, ``report`` and the CLI sit on top of them.
"""

__version__ = "0.1.0"

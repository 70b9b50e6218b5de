"""saferm - a careful alternative to rm(1).

Nothing is removed unless asked for explicitly: by default every path is
only reported as what would be removed.
"""

__version__ = "0.1.0"

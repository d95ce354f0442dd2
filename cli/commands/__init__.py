"""
zcatr CLI Commands
Contains the executable modules for viewing compressed files and archives.
"""

from . import view

__all__ = ["view"]

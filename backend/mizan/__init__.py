"""
Mizan office core: alert feed, billing figures and document register derived
from case, client and hearing snapshots.
"""
__version__ = "1.0.0"

"""
GenLayer CLI - Manage GenLayer contracts, validators and the local simulator.
"""

__version__ = "0.1.0"

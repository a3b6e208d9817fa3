"""
openslots - weekly 30-minute availability from openings and appointments.
"""

__version__ = "0.1.0"

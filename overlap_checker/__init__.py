"""
Document Overlap Checker

Scores a newly submitted document against previously submitted ones and
reports the sentences they share.
"""

__version__ = "1.0.0"

from .core import *

"""Cleaning service CRM backend - recurring job scheduling"""

__version__ = "1.0.0"

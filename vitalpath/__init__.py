"""
VitalPath — rule-based cardiometabolic risk screening.

Advisory signals only; not a diagnostic system of record.
"""

__version__ = "1.0.0"

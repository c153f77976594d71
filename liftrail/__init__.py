"""
LiftRail - Elevator Guide Rail Calculation Platform
"""

__version__ = "1.0.0"

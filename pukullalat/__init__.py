"""
Pukul Lalat - swat the mosquitoes, keep the child out of the water.
"""

__version__ = "1.0.0"

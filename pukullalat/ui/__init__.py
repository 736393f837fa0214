"""
Input/UI models shared by the front end.
"""
from .name_entry import NameEntry

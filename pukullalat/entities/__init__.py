"""
Game entities package.
"""
from .mosquito import Mosquito, SWAT_COLUMN, EXIT_COLUMN
from .child import Child
from .bear import Bear

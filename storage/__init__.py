"""
Storage module for the quote catalog.
"""

from .base import BaseStorage
from .memory import MemStorage
from .models import Quote, QuoteCreate, User, UserCreate
from .seed import SAMPLE_QUOTES

__all__ = [
    'BaseStorage',
    'MemStorage',
    'Quote',
    'QuoteCreate',
    'User',
    'UserCreate',
    'SAMPLE_QUOTES',
]

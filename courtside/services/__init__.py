"""
Services package for the Courtside engine.

Store-backed read services and the shared session base class.
"""

from .base import BaseService

__all__ = ['BaseService']

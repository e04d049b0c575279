"""
Mock provider package.
"""

from .provider import MockProvider

__all__ = ['MockProvider']

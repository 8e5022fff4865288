"""
Core - Base component shared by every comparison viewer module
"""

from .base_protocols import BaseComponent, ComponentProtocol

__all__ = ['BaseComponent', 'ComponentProtocol']

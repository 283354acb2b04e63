"""CLI package for shelfstream"""
from .main import cli

__all__ = ['cli']

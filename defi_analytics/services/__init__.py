"""Service modules"""
from .refresh import RefreshController

__all__ = ["RefreshController"]

"""Drillbit - Roblox Studio plugin installer."""

__version__ = "0.1.0"

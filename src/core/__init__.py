"""Ledger domain layer: entities, store interface and exceptions."""

from src.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]

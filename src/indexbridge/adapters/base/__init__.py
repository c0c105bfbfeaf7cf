"""Base engine interface — Abstract classes and collaborator protocols."""

from indexbridge.adapters.base.adapter import RecordRepository, Searchable, SearchEngine

__all__ = ["RecordRepository", "SearchEngine", "Searchable"]

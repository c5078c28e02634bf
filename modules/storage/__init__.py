"""
Storage Module
==============

Responsibility:
- Named persistence identity (StorageContext) shared between a model and its delegates.
- Per-model knowledge base persisted with joblib.
"""

from .storage_context import StorageContext
from .knowledge_base import KnowledgeBase

__all__ = ['StorageContext', 'KnowledgeBase']

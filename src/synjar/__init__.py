"""Synjar - multi-tenant knowledge base: documents, tags, ingestion."""

__version__ = "0.1.0"

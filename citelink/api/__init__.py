"""
Citation service API

FastAPI-based REST API for citation detection and navigation.
"""

from .citation_api import create_app, CitationAPI

__all__ = ["create_app", "CitationAPI"]

"""Text generator backends."""

from app.adapters.base import BaseTextGenerator
from app.adapters.local_generator import LocalTextGenerator
from app.adapters.rag_client import RagTextGenerator

__all__ = ["BaseTextGenerator", "LocalTextGenerator", "RagTextGenerator"]

"""
Models package for stylemark

Contains data structures and type definitions for the render pipeline.
"""

from .state import RenderState, pipeline
from .document import ParsedDocument, FenceBlock, FenceOptions, CodeBlockHTML, RenderResult

__all__ = [
    "RenderState",
    "pipeline",
    "ParsedDocument",
    "FenceBlock",
    "FenceOptions",
    "CodeBlockHTML",
    "RenderResult",
]

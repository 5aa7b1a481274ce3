"""
Render state model and pipeline helper

Defines RenderState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar
from dataclasses import dataclass, field

from ..config import AppSettings, appsettings
from .document import FenceBlock, ParsedDocument, RenderResult


RS = TypeVar("RS", bound="RenderState")


@dataclass
class RenderState:
    """
    Central state container for one document parse (state bus pattern).

    This dataclass carries all state through the functional pipeline,
    with each stage adding new fields as the render progresses. A fresh
    instance is created for every parse call; nothing in it is shared.

    Pipeline stages and their state additions:
        - Initial: source, settings, verbosity
        - document_split: document
        - renderer_configure: highlighter, blockHandler
        - body_render: html
        - result_resolve: result

    Attributes:
        source: Raw input text (front matter + Markdown body)
        settings: Settings in effect for this call
        verbosity: Logging verbosity level (0 quiet, up to 3)
        document: Front matter split from the body
        highlighter: Per-call (code, language) -> HTML highlight function
        blockHandler: Per-call FenceBlock -> HTML fragment function
        html: Rendered body HTML
        result: Final RenderResult
    """

    source: str = field(default="")
    settings: AppSettings = field(default_factory=lambda: appsettings)
    verbosity: int = field(default=0)

    document: Optional[ParsedDocument] = field(default=None)
    highlighter: Optional[Callable[[str, str], str]] = field(default=None)
    blockHandler: Optional[Callable[[FenceBlock], str]] = field(default=None)
    html: str = field(default="")
    result: Optional[RenderResult] = field(default=None)

    @classmethod
    def state_createFromSource(
        cls: Type["RenderState"], source: str, settings: Optional[AppSettings] = None
    ) -> "RenderState":
        """
        Create the initial RenderState for a parse call.

        Args:
            source: Raw document text
            settings: Optional settings override (defaults to appsettings)

        Returns:
            RenderState with source, settings and verbosity populated
        """
        settings = settings or appsettings
        return cls(source=source, settings=settings, verbosity=settings.verbosity)

    def copy(self: RS) -> RS:
        """
        Creates a shallow copy of the RenderState instance.

        Returns:
            A new RenderState instance.
        """
        return type(self)(**self.__dict__)

    def summary(self) -> Dict[str, Any]:
        """Small dict describing progress, for debug logging"""
        return {
            "chars": len(self.source),
            "attributes": sorted(self.document.attributes) if self.document else [],
            "html_chars": len(self.html),
        }


def pipeline(
    initial_state: RenderState, *stages: Callable[[RenderState], RenderState]
) -> RenderState:
    """
    Thread a RenderState through stages, left to right.

    pipeline(s, document_split, body_render) is
    body_render(document_split(s)). Each stage returns a new state.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)

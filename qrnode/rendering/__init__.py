"""QR code rendering adapters."""

from .base import CodeGenerator
from .script import DEFAULT_ELEMENT_ID, ScriptCodeGenerator, render

__all__ = ["CodeGenerator", "DEFAULT_ELEMENT_ID", "ScriptCodeGenerator", "render"]

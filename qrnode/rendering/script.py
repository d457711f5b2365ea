"""
Default generator emitting a client-side QR code script.
"""

import json
import logging
from typing import Optional

from ..models import ScriptTextOutputCallback
from .base import CodeGenerator

logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_ID = "callback_0"

_SCRIPT_TEMPLATE = """\
(function () {{
    var callbackElement = document.getElementById({element_id});
    if (callbackElement === null) {{
        return;
    }}
    var container = document.createElement("div");
    container.className = "qr-code text-center";
    callbackElement.parentNode.insertBefore(container, callbackElement);
    var qr = qrcode({type_number}, {error_correction});
    qr.addData({text});
    qr.make();
    container.innerHTML = qr.createImgTag({cell_size});
}})();
"""


def _js_string(value: str) -> str:
    # JSON string literals are valid JavaScript; also keep "</script>" from
    # closing the enclosing tag.
    return json.dumps(value).replace("</", "<\\/")


class ScriptCodeGenerator(CodeGenerator):
    """Generator producing JavaScript for the login page's qrcode library."""

    def __init__(self, type_number: int = 0, error_correction: str = "L", cell_size: int = 4):
        """
        Initialize script generator.

        Args:
            type_number: QR version (0 lets the client pick)
            error_correction: Error correction level (L, M, Q, H)
            cell_size: Pixel size of a single module
        """
        if error_correction not in ("L", "M", "Q", "H"):
            raise ValueError(f"Unsupported error correction level: {error_correction}")
        self.type_number = type_number
        self.error_correction = error_correction
        self.cell_size = cell_size

    def name(self) -> str:
        return "script"

    def generate(self, element_id: str, text: str) -> str:
        return _SCRIPT_TEMPLATE.format(
            element_id=_js_string(element_id),
            type_number=self.type_number,
            error_correction=_js_string(self.error_correction),
            text=_js_string(text),
            cell_size=self.cell_size,
        )


def render(
    text: str,
    generator: Optional[CodeGenerator] = None,
    element_id: str = DEFAULT_ELEMENT_ID,
) -> ScriptTextOutputCallback:
    """
    Wrap a payload into the callback sent to the client.

    Args:
        text: Payload to encode
        generator: Code generator (defaults to ScriptCodeGenerator)
        element_id: Id of the page element the callback is bound to

    Returns:
        Script output callback carrying the generated fragment
    """
    generator = generator or ScriptCodeGenerator()
    script = generator.generate(element_id, text)
    logger.debug(f"Generated {len(script)}-byte fragment with '{generator.name()}' generator")
    return ScriptTextOutputCallback(message=script)

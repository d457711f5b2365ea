"""
Base code generator interface.
"""

from abc import ABC, abstractmethod


class CodeGenerator(ABC):
    """
    Abstract base class for QR code generators.

    Generators turn payload text into a script or markup fragment that the
    host's client renders as a QR code. How the image is drawn is up to the
    client.
    """

    @abstractmethod
    def name(self) -> str:
        """Return the name of this generator."""
        pass

    @abstractmethod
    def generate(self, element_id: str, text: str) -> str:
        """
        Generate a fragment that renders ``text`` as a QR code.

        Args:
            element_id: Id of the page element the callback is bound to
            text: Payload to encode

        Returns:
            Script or markup for the client
        """
        pass

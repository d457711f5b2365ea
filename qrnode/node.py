"""
QR code authentication node.
"""

import logging
from enum import Enum
from typing import List, Optional

from .exceptions import MissingKeyError
from .models import DEFAULT_OUTCOME, Action, NodeConfig, ScriptTextOutputCallback
from .payload import build_payload
from .rendering import DEFAULT_ELEMENT_ID, CodeGenerator, ScriptCodeGenerator, render
from .state import TreeContext

logger = logging.getLogger(__name__)


class NodeState(str, Enum):
    """Where an invocation sits in the node's two-step exchange."""

    AWAITING_RENDER = "awaiting_render"
    COMPLETED = "completed"


class QRCodeNode:
    """
    Displays a QR code whose content is free text or a URI.

    Values are read from shared state. The first invocation sends a script
    callback; once the client returns that callback with a non-empty message
    the node moves on to its single outcome.
    """

    def __init__(
        self,
        config: NodeConfig,
        generator: Optional[CodeGenerator] = None,
        element_id: str = DEFAULT_ELEMENT_ID,
    ):
        """
        Initialize the node.

        Args:
            config: Validated node configuration
            generator: Code generator for the QR fragment
            element_id: Id of the page element the callback is bound to
        """
        self.config = config
        self.generator = generator or ScriptCodeGenerator()
        self.element_id = element_id

    @staticmethod
    def outcomes() -> List[str]:
        """Return the outcomes this node can produce."""
        return [DEFAULT_OUTCOME]

    def state_for(self, context: TreeContext) -> NodeState:
        """Report which state the given invocation corresponds to."""
        callback = context.get_callback(ScriptTextOutputCallback)
        if callback is not None and callback.message:
            return NodeState.COMPLETED
        return NodeState.AWAITING_RENDER

    def process(self, context: TreeContext) -> Action:
        """
        Process one invocation from the host.

        Args:
            context: Tree context for this request

        Returns:
            Action advancing to the next node, or sending the QR callback

        Raises:
            MissingKeyError: If the payload references an unset shared-state key
        """
        if self.state_for(context) == NodeState.COMPLETED:
            logger.info("QR code already delivered, advancing to next node")
            return Action.goto_next()

        return Action.send(self._create_callback(context))

    def _create_callback(self, context: TreeContext) -> ScriptTextOutputCallback:
        """Build the payload and wrap it in a script callback."""
        try:
            payload = build_payload(self.config, context.shared_state)
        except MissingKeyError as e:
            logger.warning(
                f"Cannot build {self.config.operation_mode.value} payload: "
                f"shared state has no value for '{e.key}'"
            )
            raise

        logger.info(
            f"Sending QR code ({self.config.operation_mode.value}, {len(payload)} chars)"
        )
        return render(payload, self.generator, self.element_id)

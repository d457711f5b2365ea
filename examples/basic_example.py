#!/usr/bin/env python3
"""
Basic QR code node example: two invocations of the node.

This example demonstrates:
1. Building a URI-mode configuration
2. The first invocation sending the QR code callback
3. The resumed invocation advancing to the next node
"""

from qrnode.config import config_from_dict
from qrnode.models import ScriptTextOutputCallback
from qrnode.node import QRCodeNode
from qrnode.payload import build_payload
from qrnode.state import SharedState, TreeContext


def main():
    print("QR Code Node Example")
    print("=" * 50)

    # Step 1: Configure the node
    print("\n1. Configuring node...")
    config = config_from_dict(
        {
            "operationMode": "URI",
            "uriScheme": "https",
            "uriHost": "login.example.com",
            "uriPort": "443",
            "uriResource": "device/verify",
            "uriQueryParams": {"user": "&username", "realm": "alpha"},
        }
    )
    node = QRCodeNode(config)
    state = SharedState({"username": "demo"})

    print(f"   Operation mode: {config.operation_mode.value}")
    print(f"   Payload: {build_payload(config, state)}")

    # Step 2: First invocation sends the callback
    print("\n2. First invocation...")
    action = node.process(TreeContext(shared_state=state))
    callback = action.callbacks[0]
    print(f"   Outcome: {action.outcome}")
    print(f"   Callback: {callback.type} ({len(callback.message)} chars)")

    # Step 3: The client returns the callback, so the node advances
    print("\n3. Resumed invocation...")
    returned = ScriptTextOutputCallback(message=callback.message)
    action = node.process(TreeContext(shared_state=state, callbacks=[returned]))
    print(f"   Outcome: {action.outcome}")


if __name__ == "__main__":
    main()

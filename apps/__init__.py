"""
Apps package - FastAPI services.

- order_signer: authenticated order signing and relay gateway
"""

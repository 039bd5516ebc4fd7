"""Route modules for the Order Signer Gateway.

- health: unauthenticated liveness endpoint
- orders: /sign and /place
"""

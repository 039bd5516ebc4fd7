"""
Order Signer Gateway.

Accepts untrusted order requests over HTTP, normalizes them, signs them with
a held private key and optionally relays the signed order to a downstream
worker, passing the worker's response back verbatim.

Components:
- normalizer: canonical OrderRequest construction with accumulated errors
- auth: bearer-token gate for every route except /health
- signing: OrderSigner protocol and the py-clob-client adapter
- relay_client: HTTP relay of signed orders to the worker
- pipeline: sign-only and sign-and-relay operations
- app_factory / main: FastAPI composition and process bootstrap
"""

__version__ = "1.0.0"

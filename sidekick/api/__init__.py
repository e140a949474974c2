"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness check (credentials configured)
- POST /v1/chat-remix: Sidekick chat turn with library context
- POST /v1/remix-prompt: One-shot prompt remix
"""

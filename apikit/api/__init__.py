"""
Reference HTTP surface for apikit endpoints.

Design intent:
- Show how APIEndpoint adapters are mounted on a FastAPI application.
- Keep route handlers free of envelope and status-code bookkeeping.
"""

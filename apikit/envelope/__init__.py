"""
Envelope module boundary for apikit.

Design intent:
- Define the single JSON contract exchanged between client and server.
- Stay free of transport and framework imports so both sides can depend on it.
"""
from .models import APIMessage, APIResponse, ENVELOPE_FIELDS, JSON_MEDIA_TYPE, MISSING_CODE

__all__ = ["APIMessage", "APIResponse", "ENVELOPE_FIELDS", "JSON_MEDIA_TYPE", "MISSING_CODE"]

"""
HTTP API surface for the riskcurve service.

Design intent:
- Keep request/response schemas typed at the boundary.
- Delegate computation to the configured calculator provider.
"""

"""
Riskcurve service package.

Design intent:
- Keep the risk calculator pure and importable without the web stack.
- Keep API wiring, config and session state under api/ and internal_core/.
"""

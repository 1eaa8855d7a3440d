"""
Risk curve boundary for the riskcurve service.

Design intent:
- Compute demo-only sex-stratified risk curves from closed-form rules.
- Keep display formatting separate from the arithmetic.
- Avoid any claim of clinical validity in generated text.
"""

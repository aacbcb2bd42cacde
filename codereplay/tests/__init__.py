"""
Test suite for CodeReplay.

Focus areas:
- Editor position semantics
- Capture filter
- Saved log integrity
- Replay ordering, identity mapping and failure tolerance
"""

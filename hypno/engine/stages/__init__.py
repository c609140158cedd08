"""Compositing stages, one module per paint layer (s1_ … s5_)."""

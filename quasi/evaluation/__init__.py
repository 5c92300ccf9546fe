"""Host runtime: lazy closure application, evaluator and special forms."""

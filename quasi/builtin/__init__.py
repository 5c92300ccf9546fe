"""Python builtins available to host code."""

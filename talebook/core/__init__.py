"""Core generation logic for tales (LLM signatures and modules)."""

"""Command-line interface for llmctxenv."""

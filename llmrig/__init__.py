"""Building blocks for LLM-powered applications: agents, completions, embeddings and file loaders."""

__version__ = "0.1.0"
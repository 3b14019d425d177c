"""adonice: draft Azure DevOps pull requests from the local diff with an LLM."""

__version__ = "0.1.0"

"""agentpack — distribute AI assistant rules and commands into tool layouts."""

__version__ = "0.3.0"

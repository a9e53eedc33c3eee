"""Infrastructure layer — filesystem queries, staged copies, templates.

This layer depends on stdlib and third-party libs (Jinja2).
It must never import from services, commands, or output.
"""

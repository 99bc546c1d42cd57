"""
Utility modules organized by domain.

Submodules:
- logging: Logging configuration
- ui: Spacer rendering, terminal size, and the output sink
"""

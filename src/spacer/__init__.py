"""
spacer: relay piped output and mark idle gaps with a timestamped spacer line.
"""

__version__ = "0.1.0"

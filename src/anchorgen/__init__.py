"""
anchorgen: TypeScript client generator for Anchor programs.
"""

__version__ = "0.1.0"

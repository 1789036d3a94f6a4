"""
crrl: fetch and save .cursorrules files from the command line.
"""

__version__ = "0.1.0"

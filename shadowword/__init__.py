"""
ShadowWord: a pass-and-play party game where the group hunts for the liar.
"""

__version__ = "1.0.0"

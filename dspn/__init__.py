"""
DSPN Nerve-Conduction Scoring

Percentile-based electrophysiological classification of diabetic
sensorimotor polyneuropathy (Davies scale, Scores #2 and #4).
"""
__version__ = "1.0.0"

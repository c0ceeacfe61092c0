"""
Evaluation utilities: classification metrics and the minimum-accuracy gate.
"""

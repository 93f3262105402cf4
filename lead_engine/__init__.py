"""
Lead Quality Engine
===================
A five-stage pure pipeline for lead quality scoring and qualification:
  Stage 1: Feature Extraction (per-dimension scores)
  Stage 2: Score Combination (weighting profile)
  Stage 3: Confidence Estimation (completeness and dispersion)
  Stage 4: Classification (High/Medium/Low, hot/warm/cold)
  Stage 5: Explanation (factors and recommendations)
"""

__version__ = "1.0.0"
__author__ = "Lead Quality Team"

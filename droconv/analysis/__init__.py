"""Analysis tools for DRO captures."""

from droconv.analysis.dro_analyzer import DROAnalysis, DROAnalyzer

__all__ = ["DROAnalysis", "DROAnalyzer"]

"""Adaptive text segmentation and clipboard content classification."""

from .analyzer import ClipboardContentAnalyzer
from .cache import SegmentationCache
from .classifier import classify
from .config import AnalyzerConfig, Config, OffloadConfig, RuleConfig, SegmentationOptions
from .exceptions import (
    ClipboardSecurityError,
    ClipsegError,
    OffloadTimeout,
    OffloadUnavailable,
    UnknownRuleError,
)
from .models import AnalysisReport, ContentType, ReportType
from .offload import OffloadScheduler
from .pipeline import Segmenter
from .registry import StrategyRegistry, select_plugins
from .rules import RuleAnalysis, apply_single_rule, multi_rule_analyze

__version__ = "0.1.0"

__all__ = [
    "AnalysisReport",
    "AnalyzerConfig",
    "ClipboardContentAnalyzer",
    "ClipboardSecurityError",
    "ClipsegError",
    "Config",
    "ContentType",
    "OffloadConfig",
    "OffloadScheduler",
    "OffloadTimeout",
    "OffloadUnavailable",
    "ReportType",
    "RuleAnalysis",
    "RuleConfig",
    "SegmentationCache",
    "SegmentationOptions",
    "Segmenter",
    "StrategyRegistry",
    "UnknownRuleError",
    "apply_single_rule",
    "classify",
    "multi_rule_analyze",
    "select_plugins",
]

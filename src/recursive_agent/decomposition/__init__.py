"""Task classification subsystem.

Provides the decomposition policy, the task splitter, the simulated work
executor and the classifier interface that bundles them for the engine.
"""

from .base import TaskClassifier
from .policy import DecompositionPolicy, COMPLEXITY_KEYWORDS
from .splitter import TaskSplitter, SUBTASK_RULES
from .executor import WorkExecutor, COMPLETION_RULES
from .keyword_classifier import KeywordTaskClassifier
from .rules import CategoryRule, match_first

__all__ = [
    "TaskClassifier",
    "DecompositionPolicy",
    "COMPLEXITY_KEYWORDS",
    "TaskSplitter",
    "SUBTASK_RULES",
    "WorkExecutor",
    "COMPLETION_RULES",
    "KeywordTaskClassifier",
    "CategoryRule",
    "match_first",
]

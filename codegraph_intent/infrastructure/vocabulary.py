"""
Query Vocabulary

Fixed lexical tables shared by the feature extractor and the intent scorer.
"""

import re

from codegraph_intent.domain.models import QuestionType

# Architectural suffixes that mark an identifier as class-like
CLASS_SUFFIXES = (
    "Service",
    "Controller",
    "Repository",
    "Manager",
    "Handler",
    "Component",
    "Util",
    "Exception",
    "Entity",
    "Model",
    "Config",
    "Factory",
    "Builder",
    "Helper",
    "Processor",
    "Provider",
    "Resolver",
    "Validator",
    "Converter",
    "Mapper",
    "Adapter",
    "Proxy",
    "Decorator",
    "Strategy",
    "Command",
    "Observer",
    "Listener",
    "Filter",
    "Interceptor",
    "Guard",
    "Policy",
    "Rule",
    "Specification",
    "Criteria",
    "Query",
    "Request",
    "Response",
    "DTO",
    "VO",
    "Bean",
    "Interface",
    "Abstract",
    "Impl",
)

CLASS_PATTERN = re.compile(r"\b[A-Z][a-zA-Z0-9]*(?:" + "|".join(CLASS_SUFFIXES) + r")\b")
METHOD_PATTERN = re.compile(r"\b[a-z][a-zA-Z0-9]*\s*\(\s*\)")
PACKAGE_PATTERN = re.compile(r"\b[a-z]+(?:\.[a-z]+)+\b")

# Lead interrogative plus a qualifying verb later in the same query
QUESTION_PATTERNS = {
    QuestionType.WHAT: re.compile(r"\b(what|which)\b.*\b(is|are|does|do)\b", re.IGNORECASE),
    QuestionType.HOW: re.compile(r"\bhow\b.*\b(does|do|works?)\b", re.IGNORECASE),
    QuestionType.WHERE: re.compile(r"\bwhere\b.*\b(is|are)\b", re.IGNORECASE),
    QuestionType.WHY: re.compile(r"\b(why|why does|why is)\b", re.IGNORECASE),
    QuestionType.WHEN: re.compile(r"\b(when|during|at what)\b", re.IGNORECASE),
}

SENTENCE_SPLIT = re.compile(r"[.!?]+")

DEBUG_KEYWORDS = (
    "error",
    "exception",
    "bug",
    "fail",
    "crash",
    "broken",
    "issue",
    "problem",
    "wrong",
    "null",
    "undefined",
    "stack",
    "trace",
)

FLOW_KEYWORDS = (
    "flow",
    "sequence",
    "steps",
    "process",
    "execution",
    "call",
    "invoke",
    "trigger",
    "run",
    "execute",
    "lifecycle",
)

ARCHITECTURE_KEYWORDS = (
    "architecture",
    "design",
    "structure",
    "pattern",
    "relationship",
    "dependency",
    "coupling",
    "component",
    "module",
    "layer",
)

PERFORMANCE_KEYWORDS = (
    "performance",
    "slow",
    "fast",
    "optimize",
    "efficient",
    "memory",
    "cpu",
    "time",
    "latency",
    "throughput",
    "bottleneck",
)

# Sentiment cues, checked in this order
PROBLEM_TERMS = ("error", "problem", "issue")
LEARNING_TERMS = ("understand", "explain", "show")

CONJUNCTIONS = (" and ", " or ")
NEGATIONS = ("not ", "don't ", "doesn't ")
IMPERATIVE_PREFIXES = ("show ", "find ", "get ")


def contains_any(text: str, terms: tuple[str, ...]) -> bool:
    """True if any term occurs as a substring of text."""
    return any(term in text for term in terms)

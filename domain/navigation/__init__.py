from domain.navigation.base import NavigationRule
from domain.navigation.direct import DirectNavigationRule
from domain.navigation.predicate import PredicateNavigationRule
from domain.navigation.answer_context import AnswerContext
from domain.navigation.result_predicate import (
    AllOf,
    AnswerEquals,
    AnswerInRange,
    AnswerIncludesAll,
    AnswerIsTrue,
    AnswerMatches,
    AnswerOneOf,
    AnswerSkipped,
    AnyOf,
    Not,
    ResultPredicate,
    ResultPredicateEvaluator,
    ResultSelector,
)

__all__ = [
    "NavigationRule",
    "DirectNavigationRule",
    "PredicateNavigationRule",
    "AnswerContext",
    "ResultSelector",
    "ResultPredicate",
    "ResultPredicateEvaluator",
    "AnswerEquals",
    "AnswerInRange",
    "AnswerOneOf",
    "AnswerIncludesAll",
    "AnswerIsTrue",
    "AnswerMatches",
    "AnswerSkipped",
    "AllOf",
    "AnyOf",
    "Not",
]

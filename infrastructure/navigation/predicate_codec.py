# infrastructure/navigation/predicate_codec.py
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from domain.exceptions import ValidationError
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
    ResultSelector,
)
from domain.results import thaw_answer
from infrastructure.codec_errors import RuleDecodeError, require_field, require_mapping

# all_of / any_of / not nesting accepted by decode
MAX_PREDICATE_DEPTH = 32


class ResultPredicateCodec:
    """
    Dict form of result predicates. Only the predicate kinds below are
    understood; anything else fails to decode.

    {"kind": "equals", "selector": {"question": "q1"}, "expected": "yes"}
    {"kind": "all_of", "predicates": [...]}
    """

    def __init__(self) -> None:
        self._decoders: Dict[str, Callable[[Mapping[str, Any]], ResultPredicate]] = {
            AnswerEquals.kind: self._decode_equals,
            AnswerInRange.kind: self._decode_in_range,
            AnswerOneOf.kind: lambda d: AnswerOneOf(self._selector(d), self._values(d)),
            AnswerIncludesAll.kind: lambda d: AnswerIncludesAll(self._selector(d), self._values(d)),
            AnswerIsTrue.kind: self._decode_boolean,
            AnswerMatches.kind: lambda d: AnswerMatches(
                self._selector(d), require_field(d, "pattern", str, "matches predicate", RuleDecodeError)
            ),
            AnswerSkipped.kind: lambda d: AnswerSkipped(self._selector(d)),
            AllOf.kind: lambda d: AllOf(self._decode_list(d, "all_of")),
            AnyOf.kind: lambda d: AnyOf(self._decode_list(d, "any_of")),
            Not.kind: lambda d: Not(self._decode(d.get("predicate"))),
        }

    def encode(self, predicate: ResultPredicate) -> Dict[str, Any]:
        if isinstance(predicate, (AllOf, AnyOf)):
            return {"kind": predicate.kind, "predicates": [self.encode(p) for p in predicate.predicates]}
        if isinstance(predicate, Not):
            return {"kind": predicate.kind, "predicate": self.encode(predicate.predicate)}

        if predicate.kind not in self._decoders:
            raise RuleDecodeError(f"Cannot encode result predicate: {type(predicate).__name__}")

        payload: Dict[str, Any] = {"kind": predicate.kind, "selector": self._encode_selector(predicate.selector)}
        if isinstance(predicate, (AnswerEquals, AnswerIsTrue)):
            payload["expected"] = thaw_answer(predicate.expected)
        elif isinstance(predicate, AnswerInRange):
            payload["minimum"] = predicate.minimum
            payload["maximum"] = predicate.maximum
        elif isinstance(predicate, (AnswerOneOf, AnswerIncludesAll)):
            payload["values"] = thaw_answer(predicate.values)
        elif isinstance(predicate, AnswerMatches):
            payload["pattern"] = predicate.pattern
        return payload

    def decode(self, data: Any) -> ResultPredicate:
        self._check_depth(data)
        return self._decode(data)

    def _check_depth(self, data: Any) -> None:
        pending = [(data, 1)]
        while pending:
            node, depth = pending.pop()
            if depth > MAX_PREDICATE_DEPTH:
                raise RuleDecodeError(f"Result predicates nested deeper than {MAX_PREDICATE_DEPTH} levels")
            if not isinstance(node, Mapping):
                continue
            children = node.get("predicates")
            if isinstance(children, list):
                pending.extend((child, depth + 1) for child in children)
            if "predicate" in node:
                pending.append((node["predicate"], depth + 1))

    def _decode(self, data: Any) -> ResultPredicate:
        data = require_mapping(data, "result predicate", RuleDecodeError)
        kind = require_field(data, "kind", str, "result predicate", RuleDecodeError)
        decoder = self._decoders.get(kind)
        if decoder is None:
            raise RuleDecodeError(f"Unknown result predicate kind: {kind}")
        try:
            return decoder(data)
        except ValidationError as exc:
            raise RuleDecodeError(f"Invalid {kind} predicate: {exc}") from exc

    def _encode_selector(self, selector: ResultSelector) -> Dict[str, str]:
        encoded = {"question": selector.question_identifier}
        if selector.step_identifier is not None:
            encoded["step"] = selector.step_identifier
        if selector.task_identifier is not None:
            encoded["task"] = selector.task_identifier
        return encoded

    def _selector(self, data: Mapping[str, Any]) -> ResultSelector:
        raw = data.get("selector")
        # shorthand: "selector": "q1"
        if isinstance(raw, str):
            return ResultSelector(question_identifier=raw)
        raw = require_mapping(raw, "predicate selector", RuleDecodeError)
        return ResultSelector(
            question_identifier=require_field(raw, "question", str, "predicate selector", RuleDecodeError),
            step_identifier=require_field(raw, "step", str, "predicate selector", RuleDecodeError, optional=True),
            task_identifier=require_field(raw, "task", str, "predicate selector", RuleDecodeError, optional=True),
        )

    def _values(self, data: Mapping[str, Any]) -> tuple:
        return tuple(require_field(data, "values", list, f"{data.get('kind')} predicate", RuleDecodeError))

    def _decode_equals(self, data: Mapping[str, Any]) -> AnswerEquals:
        if "expected" not in data:
            raise RuleDecodeError("equals predicate: missing required field 'expected'")
        return AnswerEquals(self._selector(data), data["expected"])

    def _decode_in_range(self, data: Mapping[str, Any]) -> AnswerInRange:
        where = "in_range predicate"
        return AnswerInRange(
            self._selector(data),
            minimum=require_field(data, "minimum", (int, float), where, RuleDecodeError, optional=True),
            maximum=require_field(data, "maximum", (int, float), where, RuleDecodeError, optional=True),
        )

    def _decode_boolean(self, data: Mapping[str, Any]) -> AnswerIsTrue:
        expected = data.get("expected", True)
        if not isinstance(expected, bool):
            raise RuleDecodeError("boolean predicate: 'expected' must be true or false")
        return AnswerIsTrue(self._selector(data), expected)

    def _decode_list(self, data: Mapping[str, Any], kind: str):
        items = require_field(data, "predicates", list, f"{kind} predicate", RuleDecodeError)
        return tuple(self._decode(item) for item in items)

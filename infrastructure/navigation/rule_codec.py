# infrastructure/navigation/rule_codec.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping

from domain.exceptions import ValidationError
from domain.navigation.base import NavigationRule
from domain.navigation.direct import DirectNavigationRule
from domain.navigation.predicate import PredicateNavigationRule
from infrastructure.codec_errors import DecodeError, RuleDecodeError, require_field, require_mapping
from infrastructure.navigation.predicate_codec import ResultPredicateCodec
from infrastructure.results.task_result_codec import TaskResultCodec

RULE_FORMAT_VERSION = 1


class NavigationRuleCodec:
    """
    Versioned dict/JSON form of navigation rules.

    Decoding only ever builds one of the known rule types from plain data;
    unknown types, unsupported versions and malformed fields raise
    RuleDecodeError instead of producing a fallback rule.
    """

    def __init__(
        self,
        predicate_codec: ResultPredicateCodec | None = None,
        task_result_codec: TaskResultCodec | None = None,
    ) -> None:
        self._predicates = predicate_codec or ResultPredicateCodec()
        self._task_results = task_result_codec or TaskResultCodec()

    def encode(self, rule: NavigationRule) -> Dict[str, Any]:
        if isinstance(rule, DirectNavigationRule):
            return {
                "version": RULE_FORMAT_VERSION,
                "type": DirectNavigationRule.rule_type,
                "destination_step_identifier": rule.destination_step_identifier,
            }
        if isinstance(rule, PredicateNavigationRule):
            payload: Dict[str, Any] = {
                "version": RULE_FORMAT_VERSION,
                "type": PredicateNavigationRule.rule_type,
                "result_predicates": [self._predicates.encode(p) for p in rule.result_predicates],
                "matching_step_identifiers": list(rule.matching_step_identifiers),
                "default_step_identifier": rule.default_step_identifier,
            }
            if rule.additional_task_results:
                payload["additional_task_results"] = [
                    self._task_results.encode(r) for r in rule.additional_task_results
                ]
            return payload
        raise RuleDecodeError(f"Cannot encode navigation rule: {type(rule).__name__}")

    def decode(self, data: Any, default_version: int | None = None) -> NavigationRule:
        try:
            return self._decode_rule(data, default_version)
        except RecursionError as exc:
            raise RuleDecodeError("navigation rule is nested too deeply") from exc

    def _decode_rule(self, data: Any, default_version: int | None) -> NavigationRule:
        data = require_mapping(data, "navigation rule", RuleDecodeError)
        self._check_version(data, default_version)

        rule_type = require_field(data, "type", str, "navigation rule", RuleDecodeError)
        try:
            if rule_type == DirectNavigationRule.rule_type:
                return self._decode_direct(data)
            if rule_type == PredicateNavigationRule.rule_type:
                return self._decode_predicate(data)
        except ValidationError as exc:
            raise RuleDecodeError(f"Invalid {rule_type} navigation rule: {exc}") from exc
        raise RuleDecodeError(f"Unknown navigation rule type: {rule_type}")

    def dumps(self, rule: NavigationRule) -> str:
        return json.dumps(self.encode(rule), ensure_ascii=False, sort_keys=True)

    def loads(self, text: str) -> NavigationRule:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise RuleDecodeError(f"Invalid navigation rule JSON: {exc}") from exc
        return self.decode(data)

    def _check_version(self, data: Mapping[str, Any], default_version: int | None) -> None:
        version = data.get("version", default_version)
        if version is None:
            raise RuleDecodeError("navigation rule: missing required field 'version'")
        if isinstance(version, bool) or version != RULE_FORMAT_VERSION:
            raise RuleDecodeError(f"Unsupported navigation rule version: {version!r}")

    def _decode_direct(self, data: Mapping[str, Any]) -> DirectNavigationRule:
        destination = require_field(
            data, "destination_step_identifier", str, "direct navigation rule", RuleDecodeError
        )
        return DirectNavigationRule(destination_step_identifier=destination)

    def _decode_predicate(self, data: Mapping[str, Any]) -> PredicateNavigationRule:
        where = "predicate navigation rule"
        predicates_data = require_field(data, "result_predicates", list, where, RuleDecodeError)
        identifiers = require_field(data, "matching_step_identifiers", list, where, RuleDecodeError)
        default_id = require_field(data, "default_step_identifier", str, where, RuleDecodeError, optional=True)

        try:
            additional: List = self._task_results.decode_many(data.get("additional_task_results"))
        except DecodeError as exc:
            raise RuleDecodeError(f"{where}: {exc}") from exc

        return PredicateNavigationRule(
            result_predicates=tuple(self._predicates.decode(p) for p in predicates_data),
            matching_step_identifiers=tuple(identifiers),
            default_step_identifier=default_id,
            additional_task_results=tuple(additional),
        )

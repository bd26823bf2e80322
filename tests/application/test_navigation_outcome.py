from application.outcome import NavigationOutcome, NavigationSource


def test_source_serialises_as_plain_string():
    assert NavigationSource.RULE == "rule"
    assert NavigationSource("sequential") is NavigationSource.SEQUENTIAL


def test_outcome_defaults():
    outcome = NavigationOutcome(next_step_id="stepB", finished=False, source=NavigationSource.SEQUENTIAL)
    assert outcome.rule_type is None
    assert outcome == NavigationOutcome("stepB", False, NavigationSource.SEQUENTIAL)

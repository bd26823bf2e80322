# domain/exceptions.py
class ValidationError(Exception):
    pass


class NavigationRuleError(ValidationError):
    pass


class UnknownStepError(ValidationError):
    def __init__(self, step_id: str):
        super().__init__(f"Unknown step: {step_id}")
        self.step_id = step_id

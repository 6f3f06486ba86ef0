from lox import LoxValue
from lox.types.token import Token


class ReturnSignal(Exception):
    """Non-local exit out of the nearest enclosing function call.

    Not a LoxError. The call machinery in lox.evaluation.apply is the only
    place that catches it.
    """

    def __init__(self, keyword: Token, value: LoxValue):
        super().__init__("return")
        self.keyword = keyword
        self.value = value

from lox import LoxValue
from lox.reader.tokens import Token


class ReturnValue:
    """Signal returned by statement execution when a ``return`` ran.

    Statement executors return ``None`` when they complete normally and a
    ReturnValue when control must unwind to the nearest call site. Blocks and
    loops pass it straight up; the call machinery unwraps it.
    """

    __slots__ = ("value", "keyword")

    def __init__(self, value: LoxValue, keyword: Token):
        self.value = value
        # the 'return' token, for reporting a return outside any function
        self.keyword = keyword

    def __repr__(self):
        return f"ReturnValue({self.value!r})"

# qlemu/transformer.py
from qlemu.parser import QueryParser
from qlemu.substitution import RunContext, SubstitutionPolicy


class QueryTransformer:
    """
    Rewrites one query line: tokenize, substitute every word, join with
    single spaces and end with a newline. Word order is preserved.
    """

    def __init__(self, policy: SubstitutionPolicy, parser: QueryParser | None = None):
        self.policy = policy
        self.parser = parser if parser is not None else QueryParser()

    def transform(self, line: bytes, ctx: RunContext) -> bytes:
        words = self.parser.tokenize(line)
        if self.policy.verbose:
            print(f"[Transformer] Input query: {line.rstrip()!r}  ({len(words)} words)")
        out = [self.policy.resolve(w, ctx) for w in words]
        ctx.queries += 1
        ctx.words += len(words)
        return b" ".join(out) + b"\n"

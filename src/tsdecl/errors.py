from typing import Any, Iterable, Optional


def _format_allowed(allowed: Iterable[Any]) -> str:
    return ", ".join(sorted(str(getattr(a, "value", a)) for a in allowed))


class DeclarationError(ValueError):
    """
    Base class for invalid input passed to a node builder.
    """


class MalformedModifier(DeclarationError):
    def __init__(
        self,
        symbol: Any,
        position: Any,
        allowed: Iterable[Any],
        reason: Optional[str] = None,
    ) -> None:
        self.symbol = symbol
        self.position = position
        self.allowed = frozenset(allowed)
        self.reason = reason
        where = getattr(position, "value", position)
        if reason:
            message = f"Modifier {getattr(symbol, 'value', symbol)!r} on {where}: {reason}"
        else:
            message = (
                f"Modifier {symbol!r} is not valid for {where} "
                f"(allowed: {_format_allowed(self.allowed)})"
            )
        super().__init__(message)


class UnknownKeyword(DeclarationError):
    def __init__(self, symbol: Any, allowed: Iterable[Any]) -> None:
        self.symbol = symbol
        self.allowed = frozenset(allowed)
        super().__init__(
            f"Unknown keyword {symbol!r} (allowed: {_format_allowed(self.allowed)})"
        )


class EmptyHeritageList(DeclarationError):
    def __init__(self, token: Any) -> None:
        self.token = token
        super().__init__(
            f"'{getattr(token, 'value', token)}' clause requires at least one type"
        )


class EmptyTypeList(DeclarationError):
    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"{getattr(kind, 'value', kind)} requires at least one type")


class InvalidIdentifier(DeclarationError):
    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"{name!r} is not a valid identifier")


class InvalidLiteral(DeclarationError):
    def __init__(self, value: Any, reason: str = "unsupported literal value") -> None:
        self.value = value
        super().__init__(f"{reason}: {value!r}")


class InvalidComment(DeclarationError):
    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        super().__init__(f"{reason}: {text!r}")


class UnsupportedNodeKind(TypeError):
    """
    Raised when the printer meets a node it has no rule for. This means the
    node model and the printer are out of sync.
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"No printing rule for node kind {kind!r}")


class ReparseError(ValueError):
    def __init__(self, issues: list) -> None:
        self.issues = list(issues)
        details = "; ".join(
            f"line {i.line}, column {i.column}: {i.node_type}" for i in self.issues
        )
        super().__init__(f"Generated TypeScript does not parse ({details})")

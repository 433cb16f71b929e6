from __future__ import annotations


class EquationError(Exception):
    code = "EQN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EquationSyntaxError(EquationError, ValueError):
    """Rejected input: illegal character, unbalanced parentheses, malformed postfix."""

    code = "SYNTAX"

    def __init__(self, message: str, char: str | None = None, position: int | None = None) -> None:
        super().__init__(message)
        self.char = char
        self.position = position


class MissingVariableError(EquationError, LookupError):
    code = "MISSING_VARIABLE"

    def __init__(self, variable_name: str, message: str | None = None) -> None:
        super().__init__(message or f"Variable '{variable_name}' is not provided in the variable map")
        self.variable_name = variable_name

    def __str__(self) -> str:
        # LookupError would otherwise render the message through repr().
        return self.message


class DivisionByZeroError(EquationError, ZeroDivisionError):
    code = "DIVISION_BY_ZERO"

    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message)


class CallerArgumentError(EquationError, ValueError):
    """API misuse (missing tree, bindings or id), as opposed to a bad expression."""

    code = "CALLER_ARGUMENT"


class EquationNotFoundError(EquationError, LookupError):
    code = "NOT_FOUND"

    def __init__(self, equation_id: int) -> None:
        super().__init__(f"Equation with ID {equation_id} not found")
        self.equation_id = equation_id

    def __str__(self) -> str:
        return self.message

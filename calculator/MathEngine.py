# MathEngine.py
"""""
Core calculation engine for the Python Calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens,
   wrapped in one outer pair of parentheses.
2) Resolver: finds the innermost '( ... )' span, evaluates it and splices the
   result back in, until a single number is left. No tree is built.
3) Evaluator: reduces a parenthesis-free span tier by tier:
   '^' and '√' first, then '*' and '/', then '+' and '-'.
4) Formatter: whole-number results are handed out as int.

Errors are raised as error.EvalError subclasses. evaluate_expression() turns them
into a (value, error) pair for callers that prefer a result value.
"""""

import inspect
import math

from . import config_manager as config_manager
from . import ScientificEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

# Supported operators (kept as a simple list for quick membership checks)
Operations = ["+", "-", "*", "/", "^", "√"]
Digits = "0123456789"

# Whole numbers are only shown as int inside the signed 64-bit range
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63


# -----------------------------
# Utilities / small helpers
# -----------------------------

def print_debug(message):
    """Print a trace line tagged with the caller's line number (only if debug is on)."""
    if debug:
        line_num = inspect.currentframe().f_back.f_lineno
        print(f"[MathEngine:{line_num}] {message}")


# -----------------------------
# Token types
# -----------------------------

class Token:
    """Base class of everything the tokenizer emits. Tokens compare by kind and payload."""

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self).__name__, tuple(vars(self).values())))


class Number(Token):
    """Numeric literal or intermediate result."""
    def __init__(self, value):
        self.value = float(value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Operator(Token):
    def __init__(self, symbol):
        if symbol not in Operations:
            raise E.MalformedExpression(f"Unknown operator: {symbol}")
        self.symbol = symbol

    def __repr__(self):
        return f"Operator({self.symbol!r})"


class LeftParen(Token):
    def __repr__(self):
        return "LeftParen()"


class RightParen(Token):
    def __repr__(self):
        return "RightParen()"


def is_operator(token, *symbols):
    return isinstance(token, Operator) and token.symbol in symbols


def splice(tokens, start, end, token):
    """Replace tokens[start..end] (both ends included) with a single token, in place."""
    tokens[start:end + 1] = [token]


def render(tokens):
    """Turn tokens back into readable text (error messages and debug output)."""
    parts = []
    for token in tokens:
        if isinstance(token, Number):
            parts.append(str(format_result(token.value)))
        elif isinstance(token, Operator):
            parts.append(token.symbol)
        elif isinstance(token, LeftParen):
            parts.append("(")
        elif isinstance(token, RightParen):
            parts.append(")")
    return " ".join(parts)


# -----------------------------
# Tokenizer
# -----------------------------

def parse_number(literal):
    """Parse a collected literal; anything float() rejects becomes MalformedNumber."""
    try:
        return Number(float(literal))
    except ValueError:
        raise E.MalformedNumber(f"'{literal}' is not a number.") from None


def tokenize(problem):
    """Convert a raw input string into a token list wrapped in LeftParen ... RightParen.

    Digits and '.' are collected into one literal; every operator, parenthesis or
    blank ends it. Any other character is rejected.
    """
    full_problem = []
    literal = ""

    for current_char in problem:

        # --- Numbers: digits and decimal separator ---
        if current_char in Digits or current_char == ".":
            literal += current_char
            continue

        if literal:
            full_problem.append(parse_number(literal))
            literal = ""

        # --- Operators ---
        if current_char in Operations:
            full_problem.append(Operator(current_char))

        # --- Parentheses ---
        elif current_char == "(":
            full_problem.append(LeftParen())
        elif current_char == ")":
            full_problem.append(RightParen())

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        else:
            raise E.MalformedNumber(f"Unexpected character: '{current_char}'")

    if literal:
        full_problem.append(parse_number(literal))

    if not full_problem:
        raise E.EmptyExpression("Nothing to calculate.")

    check_balance(full_problem)

    return [LeftParen()] + full_problem + [RightParen()]


def check_balance(tokens):
    """Raise UnbalancedParentheses unless every ')' closes an earlier '(' and none stays open.

    Runs on the user's tokens, before tokenize adds the outer pair.
    """
    depth = 0
    for token in tokens:
        if isinstance(token, LeftParen):
            depth += 1
        elif isinstance(token, RightParen):
            depth -= 1
            if depth < 0:
                raise E.UnbalancedParentheses("Missing '('.")
    if depth != 0:
        raise E.UnbalancedParentheses("Missing ')'.")


# -----------------------------
# Evaluator (precedence tiers)
# -----------------------------

def operand_at(tokens, index, operator):
    """Return the float at tokens[index] or fail: every operator needs a number there."""
    if 0 <= index < len(tokens) and isinstance(tokens[index], Number):
        return tokens[index].value
    raise E.MalformedExpression(f"Missing number next to '{operator.symbol}': {render(tokens)}")


def apply_operator(operator, left_value, right_value):
    if operator == '+':
        return left_value + right_value
    elif operator == '-':
        return left_value - right_value
    elif operator == '*':
        return left_value * right_value
    elif operator == '/':
        # Division by zero is not trapped: 5/0 = inf, 0/0 = nan
        return ScientificEngine.divide(left_value, right_value)
    elif operator == '^':
        return ScientificEngine.power(left_value, right_value)
    else:
        raise E.MalformedExpression(f"Unknown operator: {operator}")


def reduce_binary(tokens, b):
    """Reduce (a, op, b) around index b to one Number."""
    operator = tokens[b]
    left_value = operand_at(tokens, b - 1, operator)
    right_value = operand_at(tokens, b + 1, operator)
    splice(tokens, b - 1, b + 1, Number(apply_operator(operator.symbol, left_value, right_value)))


def fold_signs(tokens):
    """Fold a '-' that follows another operator into the number after it (2^-2, 2*-3).

    A signed square root ('2*-√4') is taken first and folded as one negative number.
    Runs right to left so stacked signs ('2--3') fold from the inside out.
    A '-' at index 0 is left alone; the add/subtract tier treats it as a sign flip.
    """
    b = len(tokens) - 2
    while b >= 1:
        if is_operator(tokens[b], "-") and isinstance(tokens[b - 1], Operator):
            if isinstance(tokens[b + 1], Number):
                splice(tokens, b, b + 1, Number(-tokens[b + 1].value))
            elif (is_operator(tokens[b + 1], "√") and b + 2 < len(tokens)
                    and isinstance(tokens[b + 2], Number)):
                magnitude = ScientificEngine.square_root(tokens[b + 2].value)
                splice(tokens, b, b + 2, Number(-magnitude))
        b -= 1


def evaluate(tokens):
    """Reduce a parenthesis-free token list to a single float.

    The list is reduced in place. Each tier is one left-to-right scan over the
    shrinking list; a binary reduction does not advance the index, so the new value
    can meet the next operator of the same tier (2^3^2 = (2^3)^2).
    """
    if not tokens:
        raise E.EmptyExpression("Empty parentheses.")

    fold_signs(tokens)

    # --- Tier 1: powers and square roots ---
    b = 0
    while b < len(tokens):
        token = tokens[b]
        if is_operator(token, "^"):
            reduce_binary(tokens, b)
            continue
        elif is_operator(token, "√"):
            operand = operand_at(tokens, b + 1, token)
            splice(tokens, b, b + 1, Number(ScientificEngine.square_root(operand)))
        b += 1

    # --- Tier 2: multiplication and division ---
    b = 0
    while b < len(tokens):
        if is_operator(tokens[b], "*", "/"):
            reduce_binary(tokens, b)
            continue
        b += 1

    # --- Tier 3: addition and subtraction (leading '-' is a sign) ---
    b = 0
    while b < len(tokens):
        token = tokens[b]
        if b == 0 and is_operator(token, "-"):
            operand = operand_at(tokens, 1, token)
            splice(tokens, 0, 1, Number(-operand))
            continue
        elif is_operator(token, "+", "-"):
            reduce_binary(tokens, b)
            continue
        b += 1

    if len(tokens) != 1 or not isinstance(tokens[0], Number):
        raise E.MalformedExpression(f"Missing operator: {render(tokens)}")

    return tokens[0].value


# -----------------------------
# Parenthesis resolver
# -----------------------------

def resolve(tokens):
    """Evaluate innermost '( ... )' spans until a single number is left.

    After every splice the scan restarts at index 0, since the list just got shorter.
    """
    b = 0
    start = -1  # Index of the most recent '(' not yet matched

    while b < len(tokens):
        token = tokens[b]
        if isinstance(token, LeftParen):
            start = b
        elif isinstance(token, RightParen):
            if start == -1:
                raise E.UnbalancedParentheses("Missing '('.")

            ergebnis = evaluate(tokens[start + 1:b])
            print_debug(f"{render(tokens[start:b + 1])} -> {ergebnis}")
            splice(tokens, start, b, Number(ergebnis))

            b = 0
            start = -1
            continue
        b += 1

    if start != -1:
        raise E.UnbalancedParentheses("Missing ')'.")

    if len(tokens) != 1 or not isinstance(tokens[0], Number):
        raise E.MalformedExpression(f"Could not reduce: {render(tokens)}")

    return tokens[0].value


# -----------------------------
# Result formatting
# -----------------------------

def format_result(ergebnis):
    """Return an int when the float holds a whole number, else the float itself."""
    if math.isfinite(ergebnis) and INT_MIN <= ergebnis < INT_MAX:
        ganzzahl = int(ergebnis)
        if float(ganzzahl) == ergebnis:
            return ganzzahl
    return ergebnis


# -----------------------------
# Public entry points
# -----------------------------

def calculate(problem):
    """Main API: tokenize -> resolve -> format. Raises error.EvalError on failure."""
    try:
        tokens = tokenize(problem)
        print_debug(tokens)
        ergebnis = resolve(tokens)
        return format_result(ergebnis)

    # Re-raise our domain errors after attaching the source equation
    except E.EvalError as e:
        e.equation = problem
        raise
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.EvalError(f"Unexpected crash: {e}", equation=problem) from e


def evaluate_expression(expression):
    """Evaluate one expression and return (display_value, None) or (None, error)."""
    try:
        return calculate(expression), None
    except E.EvalError as e:
        print_debug(f"Error {e.code}: {e.message}")
        return None, e


def test_main():
    """Simple runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    ergebnis, error = evaluate_expression(problem)
    if error is not None:
        print(f"ERROR! ({error.code}: {error.message})")
    else:
        print(f"= {ergebnis}")


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m calculator.MathEngine
    test_main()

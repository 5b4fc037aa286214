# ScientificEngine.py
"""""
Numeric building blocks used by MathEngine.

- gcd:          Euclidean algorithm, used to reduce exponent fractions
- root:         real nth root with Newton's method
- square_root:  Babylonian iteration behind the '√' key
- power:        integer, negative and fractional exponents (base^(n/d) = root(base, d)^n)

Everything works on plain Python floats. Division by zero is not an error here:
it follows IEEE-754 and hands back inf / -inf / nan.
"""""
import math

from . import error as E


# Newton / Babylonian iteration limits
MAX_ITERATIONS = 300
TOLERANCE = 1e-12

# Initial guess policy for Newton's method
NEAR_ONE_SEED = 0.99999999999999
LARGE_NUMBER = 1e14

# Fractional exponents are rounded to this many decimal places before they are split
MAX_EXPONENT_DIGITS = 12

# Reduced denominators up to this size are taken as one root; larger ones go digit by digit
MAX_DIRECT_DENOMINATOR = 10


def divide(dividend, divisor):
    """Divide like IEEE-754 does: x/0 is +-inf and 0/0 is nan instead of ZeroDivisionError."""
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
    return dividend / divisor


def gcd(a, b):
    """Greatest common divisor of the truncated absolute values, returned as float."""
    a = int(abs(a))
    b = int(abs(b))
    while b != 0:
        a, b = b, a % b
    return float(a)


def is_even(degree):
    return float(degree).is_integer() and degree % 2 == 0


def integer_power(base, exponent):
    """base ** exponent for a non-negative int exponent (square-and-multiply)."""
    result = 1.0
    while exponent > 0:
        if exponent & 1:
            result *= base
        exponent >>= 1
        if exponent:
            base *= base
    return result


# -----------------------------
# Roots
# -----------------------------

def root(number, degree):
    """Real root of the given degree.

    Raises E.InvalidRoot for an even root of a negative number. Odd roots of negative
    numbers keep their sign, e.g. root(-8, 3) == -2.

    For whole-number degrees the input is scaled into [0.5, 2^degree) first
    (number = m * 2^e, root = root(m * 2^r, d) * 2^q with q, r = divmod(e, d)),
    so Newton's method always starts close to its answer.
    """
    number = float(number)
    degree = float(degree)

    if degree == 0:
        raise E.InvalidRoot("The 0th root is undefined.")
    if number < 0 and is_even(degree):
        raise E.InvalidRoot(f"Even root ({degree:g}) of a negative number: {number}")
    if degree < 0:
        return divide(1.0, root(number, -degree))
    if number < 0:
        return -root(-number, degree)
    if number == 0 or not math.isfinite(number):
        return number

    scale = 0
    if degree.is_integer():
        mantissa, exponent = math.frexp(number)
        scale, remainder = divmod(exponent, int(degree))
        number = math.ldexp(mantissa, remainder)

    return math.ldexp(newton_root(number, degree), scale)


def newton_root(number, degree):
    """Solve x^degree = number for a positive number with Newton's method.

    Stops when two guesses differ by less than TOLERANCE. After MAX_ITERATIONS the
    last guess is returned as it is.
    """
    if number <= 1.0:
        current_guess = number
    elif number > LARGE_NUMBER:
        current_guess = number / degree
    else:
        current_guess = NEAR_ONE_SEED

    next_guess = current_guess
    for _ in range(MAX_ITERATIONS):
        fx = power(current_guess, degree) - number
        f_prime_x = degree * power(current_guess, degree - 1)
        if f_prime_x == 0:
            break
        next_guess = current_guess - fx / f_prime_x
        if abs(current_guess - next_guess) < TOLERANCE:
            return next_guess
        current_guess = next_guess
    return next_guess


def square_root(number):
    """Babylonian square root for the '√' operator.

    Converges when two guesses differ by at most TOLERANCE relative to the guess;
    at that point the guesses are at most an ulp apart, so the loop always ends.
    """
    number = float(number)
    if number < 0:
        raise E.InvalidRoot(f"Square root of a negative number: {number}")
    if number == 0 or not math.isfinite(number):
        return number

    initial = (number + 1) / 10
    while True:
        sqrt_value = (initial + number / initial) / 2
        if abs(initial - sqrt_value) <= TOLERANCE * sqrt_value:
            return sqrt_value
        initial = sqrt_value


# -----------------------------
# Powers
# -----------------------------

def decimal_digits(exponent):
    """Split |exponent| into its integer part and its decimal digits.

    The exponent is rounded to MAX_EXPONENT_DIGITS places first, so 1/3 becomes
    0.333333333333 and trailing zeros are dropped ('0.75' -> (0, '75')).
    """
    text = format(abs(exponent), f".{MAX_EXPONENT_DIGITS}f").rstrip("0")
    whole, _, digits = text.partition(".")
    return int(whole), digits


def exponent_fraction(exponent):
    """Return the exponent as (numerator, denominator) in lowest terms, e.g. 0.75 -> (3, 4)."""
    whole, digits = decimal_digits(exponent)
    denominator = 10 ** len(digits)
    numerator = whole * denominator + int(digits or "0")

    divisor = int(gcd(numerator, denominator))
    numerator //= divisor
    denominator //= divisor

    if exponent < 0:
        numerator = -numerator
    return numerator, denominator


def power(base, exponent):
    """base ^ exponent over the reals.

    Raises E.InvalidRoot when the result would need an even root of a negative base.
    """
    base = float(base)
    exponent = float(exponent)

    if not (math.isfinite(base) and math.isfinite(exponent)):
        return math.pow(base, exponent)
    if exponent < 0:
        return divide(1.0, power(base, -exponent))
    if exponent == 0:
        return 1.0
    if exponent.is_integer():
        return integer_power(base, int(exponent))

    numerator, denominator = exponent_fraction(exponent)
    if denominator == 1:
        # Rounded to MAX_EXPONENT_DIGITS the exponent is whole
        return integer_power(base, numerator)

    if base < 0:
        if denominator % 2 == 0:
            raise E.InvalidRoot(f"{base:g}^{exponent:g} has no real value.")
        magnitude = power(-base, exponent)
        return -magnitude if numerator % 2 else magnitude

    if denominator <= MAX_DIRECT_DENOMINATOR:
        return integer_power(root(base, denominator), numerator)

    # A large denominator would mean one huge-degree root whose rounding error gets
    # raised to an equally huge numerator. Take one decimal digit per level instead.
    whole, digits = decimal_digits(exponent)
    return integer_power(base, whole) * digit_power(base, digits)


def digit_power(base, digits):
    """base ^ 0.<digits>, using base^0.d1d2.. = root(base, 10)^d1 * root(base, 10)^0.d2.."""
    if not digits:
        return 1.0
    tenth_root = root(base, 10)
    return integer_power(tenth_root, int(digits[0])) * digit_power(tenth_root, digits[1:])

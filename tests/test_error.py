import pytest

from calculator import error as E


@pytest.mark.parametrize(
    "error_class, code",
    [
        (E.MalformedNumber, "3001"),
        (E.UnbalancedParentheses, "3002"),
        (E.MalformedExpression, "3003"),
        (E.InvalidRoot, "3004"),
        (E.EmptyExpression, "3005"),
        (E.EvalError, "9999"),
    ],
)
def test_default_codes_have_messages(error_class, code):
    error = error_class("details")
    assert error.code == code
    assert code in E.ERROR_MESSAGES
    assert code[0] in E.Error_Dictionary


def test_explicit_code_and_equation():
    error = E.EvalError("boom", code="4002", equation="1+1")
    assert error.code == "4002"
    assert error.equation == "1+1"
    assert error.message == "boom"
    assert str(error) == "boom"


def test_subclasses_are_eval_errors():
    with pytest.raises(E.EvalError):
        raise E.InvalidRoot("even root")


@pytest.mark.parametrize("code", ["3001", "3002", "3003", "3004", "3005", "9999"])
def test_calculation_messages_stand_alone(code):
    # The details box shows these without anything appended
    assert not E.ERROR_MESSAGES[code].endswith(": ")

# error.py


class EvalError(Exception):
    default_code = "9999"

    def __init__(self, message, code=None, equation=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.equation = equation

class MalformedNumber(EvalError):
    default_code = "3001"

class UnbalancedParentheses(EvalError):
    default_code = "3002"

class MalformedExpression(EvalError):
    default_code = "3003"

class InvalidRoot(EvalError):
    default_code = "3004"

class EmptyExpression(EvalError):
    default_code = "3005"



Error_Dictionary = {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Sub-area
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3001" : "Malformed number.",
    "3002" : "Unbalanced parentheses.",
    "3003" : "Malformed expression.",
    "3004" : "Even root of a negative number.",
    "3005" : "Empty expression.",


    "4002" : "Calculation already Running!",
    "4501" : "Not all Settings could be saved: ", # + config file path


    "9999" : "Unexpected error."
}

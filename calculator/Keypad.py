# Keypad.py
"""""
Keystroke rules for the calculator display.

MathEngine only ever sees the finished string. These rules keep that string inside
the grammar it understands:

- '+', '*', '/' and '^' only after a digit or ')'
- '-' always (it can be a sign)
- '.' only after a digit, and only once per number
- '^' and '√' open a parenthesis right away, so their operand is always a group
- 'π' and 'e' insert their decimal value, but not straight after a digit or '.'
- '()' toggles between opening and closing a parenthesis
"""""
import math

Digits = "0123456789"
Binary_Operations = ["+", "*", "/", "^"]
Constants = {
    "π": repr(math.pi),
    "e": repr(math.e),
}


class InputBuffer:
    """The text being typed plus the number of parentheses still open."""

    def __init__(self, text=""):
        self.text = ""
        self.open_parentheses = 0
        self.load(text)

    def load(self, text):
        """Replace the whole text (undo/redo, paste, continuing from a result)."""
        self.text = text
        self.open_parentheses = max(text.count("(") - text.count(")"), 0)

    def clear(self):
        self.text = ""
        self.open_parentheses = 0

    def last_char(self):
        return self.text[-1] if self.text else ""

    def ends_with_digit(self):
        return self.text != "" and self.text[-1] in Digits

    def current_literal(self):
        """Trailing run of digits and '.', i.e. the number currently being typed."""
        b = len(self.text)
        while b > 0 and (self.text[b - 1] in Digits or self.text[b - 1] == "."):
            b -= 1
        return self.text[b:]

    def press(self, key):
        """Append the key if it is allowed here. Returns True when the text changed."""
        if key in Digits and len(key) == 1:
            self.text += key

        elif key in Binary_Operations:
            if not (self.ends_with_digit() or self.last_char() == ")"):
                return False
            self.text += key
            if key == "^":
                # Exponent is always a group: 2^(...)
                self.text += "("
                self.open_parentheses += 1

        elif key == "-":
            self.text += key

        elif key == ".":
            if not self.ends_with_digit() or "." in self.current_literal():
                return False
            self.text += key

        elif key == "√":
            if self.ends_with_digit():
                return False
            self.text += "√("
            self.open_parentheses += 1

        elif key in Constants:
            if self.ends_with_digit() or self.last_char() == ".":
                return False
            self.text += Constants[key]

        elif key == "()":
            if self.open_parentheses == 0:
                self.text += "("
                self.open_parentheses += 1
            else:
                self.text += ")"
                self.open_parentheses -= 1

        else:
            return False

        return True

    def delete_last(self):
        """Remove the last character and keep the parenthesis count in step."""
        if not self.text:
            return
        removed = self.text[-1]
        self.text = self.text[:-1]
        if removed == "(":
            self.open_parentheses -= 1
        elif removed == ")":
            self.open_parentheses += 1

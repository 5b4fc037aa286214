"""Python Calculator: token-based expression engine plus a PySide6 front end.

The engine modules (MathEngine, ScientificEngine, Keypad) import without Qt;
only UI needs PySide6.
"""

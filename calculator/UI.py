# UI.py
""""PySide6 user interface for the Python Calculator.

Structure
---------
- Calculator UI: main window with display and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Route key presses through Keypad.InputBuffer, which decides what may be typed next
- Maintain undo/redo
- Dispatch the expression to MathEngine in a worker thread
- Render results; errors show the literal "ERROR!" (plus a details box if enabled)
- Keep the display readable (auto-resizing font, dark/light mode)
- Clipboard integration and optional auto-evaluate after paste


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject), so the UI can still handle events like resizing.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal, QTimer
import sys
from pathlib import Path
import threading
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module
from . import Keypad as Keypad  # Imports Keypad.py as a module

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

ERROR_TEXT = "ERROR!"
RETURN_KEY = '⏎'
UNDO_KEY = '↶'
REDO_KEY = '↷'
CLIPBOARD_KEY = '📋'
PASTE_KEY = '📑'
SETTINGS_KEY = '⚙️'

# Characters a result may contain and still be typed on (e.g. "12.5", "-3")
RESUMABLE_CHARS = set(Keypad.Digits + ".-")


class Worker(QObject):
    """""

    This Class always runs in a seperate thread, responsible for transmitting the problem to MathEngine.py
    and emits a Signal when the calculation is done / failed back to the Calculator UI for processing

    """""

    job_finished = Signal(object, str)

    def __init__(self, problem):
        super().__init__()
        self.data = problem

    def run_Calc(self):
        # evaluate_expression never raises for calculation problems; it hands back (value, error)
        result, error = MathEngine.evaluate_expression(self.data)

        if error is not None:
            self.job_finished.emit(error, self.data)
        else:
            self.job_finished.emit(result, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening an error
    message if something went wrong. Every setting is a checkbox (True / False).

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Setting key -> checkbox

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.resize(320, 200)
        self.setMinimumSize(320, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            if not isinstance(value, bool):
                continue
            description = self.setting_description_list.get(key_value, key_value)
            checkbox = QtWidgets.QCheckBox(description)
            checkbox.setChecked(value)
            main_layout.addWidget(checkbox)
            self.widgets[key_value] = checkbox

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        # Apply darkmode on initial load
        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():
            setting_value_list[key_value] = widget.isChecked()

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()  # Tell the main window to update
            self.accept()  # Close the settings dialog
            self.update_darkmode()  # Apply theme changes
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}{config_manager.config_json}")

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list.get("darkmode") == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")  # Revert to default stylesheet


class CalculatorPrototype(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    shift_is_held = False
    initial_delay = 500
    repeat_interval = 100
    was_held = False
    held_button_value = None

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.buffer = Keypad.InputBuffer()  # The expression being typed
        self.calculator_result = ""  # Last result as text
        self.thread_active = False  # Is a calculation running?
        self.received_result = False  # Is the display showing a result / ERROR! ?
        self.first_run = True  # For font resizing logic
        self.worker = None
        self.undo = [""]  # Undo stack (buffer texts)
        self.redo = []  # Redo stack
        self.hold_timer = QTimer(self)  # Timer for button hold
        self.hold_timer.timeout.connect(self.handle_hold_tick)

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.button_objects = {}  # Dictionary to store button widgets
        self.setWindowTitle("Calculator")
        self.resize(400, 540)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(46)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for i in range(6):  # vertical
            button_grid.setRowStretch(i, 1)
        for j in range(5):  # horizontal
            button_grid.setColumnStretch(j, 1)

        # (text, row, column)
        self.buttons = [
            (SETTINGS_KEY, 0, 0), (CLIPBOARD_KEY, 0, 1), (REDO_KEY, 0, 2), (UNDO_KEY, 0, 3), ('<', 0, 4),
            ('π', 1, 0), ('e', 1, 1), ('√', 1, 2), ('^', 1, 3), ('/', 1, 4),
            ('C', 2, 0), ('7', 2, 1), ('8', 2, 2), ('9', 2, 3), ('*', 2, 4),
            ('()', 3, 0), ('4', 3, 1), ('5', 3, 2), ('6', 3, 3), ('-', 3, 4),
            ('.', 4, 0), ('1', 4, 1), ('2', 4, 2), ('3', 4, 3), ('+', 4, 4),
            ('0', 5, 0), (RETURN_KEY, 5, 4)
        ]
        column_spans = {'0': 4}

        # Buttons that support "press and hold"
        HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', UNDO_KEY, REDO_KEY, '<']

        # --- 6. Button Creation Loop ---
        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == SETTINGS_KEY:
                button.clicked.connect(self.open_settings)
            elif text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, column_spans.get(text, 1))
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click after a hold was already handled by the timer
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)

        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)

        self.setMinimumSize(400, 540)
        for button_instance in self.button_objects.values():
            if self.first_run:
                new_size = 12
            else:
                new_size = max(int(button_instance.height() / 4), 12)
            font = button_instance.font()
            font.setPointSize(new_size)
            button_instance.setFont(font)
        self.first_run = False

        self.update_font_size_display()

    def update_button_labels(self):
        # Shift held -> the clipboard button pastes instead of copies
        paste_button = self.button_objects.get(CLIPBOARD_KEY)
        if paste_button:
            paste_button.setText(PASTE_KEY if self.shift_is_held else CLIPBOARD_KEY)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
            self.update_button_labels()
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
            self.update_button_labels()
        super().keyReleaseEvent(event)

    def resume_after_result(self):
        """First key after a result: keep typing on a plain number, otherwise start over."""
        self.received_result = False
        if self.calculator_result and set(self.calculator_result) <= RESUMABLE_CHARS:
            self.buffer.load(self.calculator_result)
        else:
            self.buffer.clear()

    def handle_button_press(self, value):
        if value == RETURN_KEY:
            self.start_calculation()
            return

        if value == UNDO_KEY:
            if len(self.undo) > 1:
                self.redo.append(self.undo.pop())
                self.buffer.load(self.undo[-1])
                self.received_result = False

        elif value == REDO_KEY:
            if self.redo:
                self.undo.append(self.redo.pop())
                self.buffer.load(self.undo[-1])
                self.received_result = False

        elif value in (CLIPBOARD_KEY, PASTE_KEY):
            self.handle_clipboard()
            return

        else:
            if self.received_result:
                self.resume_after_result()

            if value == "<":
                self.buffer.delete_last()
            elif value == "C":
                self.buffer.clear()
            elif not self.buffer.press(value):
                return  # Key not allowed here, nothing changed

            self.push_undo()

        self.show_buffer()

    def handle_clipboard(self):
        # Shift not held: copy the display. Shift held: paste (raw, MathEngine validates it).
        if not self.shift_is_held:
            pyperclip.copy(self.display.text())
            return

        clipboard_text = QtWidgets.QApplication.clipboard().text().strip()
        if not clipboard_text:
            return

        if self.received_result:
            self.received_result = False
            self.buffer.clear()
        self.buffer.load(self.buffer.text + clipboard_text)
        self.push_undo()
        self.show_buffer()

        if self.setting_value_list.get("after_paste_enter") == True:
            self.start_calculation()

    def push_undo(self):
        if self.buffer.text != self.undo[-1]:
            self.undo.append(self.buffer.text)
            self.redo.clear()

    def show_buffer(self):
        self.display.setText(self.buffer.text or "0")
        self.update_font_size_display()

    def start_calculation(self):
        if self.thread_active:
            print(f"Error 4002: {E.ERROR_MESSAGES['4002']}")
            return
        if self.received_result or not self.buffer.text:
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()  # Force UI update *before* starting thread

        # --- Start Thread ---
        self.worker = Worker(self.buffer.text)
        self.worker.job_finished.connect(self.Calc_result)
        my_thread = threading.Thread(target=self.worker.run_Calc, daemon=True)
        my_thread.start()

    def update_font_size_display(self):
        # --- Dynamic Font Resizing for Display ---
        current_text = self.display.text()
        MAX_FONT_SIZE = 60
        MIN_FONT_SIZE = 10

        font = self.display.font()
        margins = self.display.textMargins()
        available_width = self.display.width() - (margins.left() + margins.right() + 5)

        # Largest size that still fits
        current_size = MAX_FONT_SIZE
        while current_size > MIN_FONT_SIZE:
            font.setPointSize(current_size)
            if QtGui.QFontMetrics(font).horizontalAdvance(current_text) <= available_width:
                break
            current_size -= 1

        font.setPointSize(current_size)
        self.display.setFont(font)

    def update_return_button(self):
        return_button = self.button_objects.get(RETURN_KEY)
        if not return_button:
            return

        # Red "X" while busy, blue return key when idle
        if self.thread_active:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText(RETURN_KEY)
        return_button.update()

    def update_darkmode(self):
        darkmode = self.setting_value_list.get("darkmode") == True
        for text, button in self.button_objects.items():
            if text == RETURN_KEY:
                self.update_return_button()
            elif darkmode:
                button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            else:
                button.setStyleSheet("font-weight: normal;")

        if darkmode:
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
        else:
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # Modal

        # Reload settings after dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        MathEngine.debug = self.setting_value_list.get("debug") == True
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list.get("darkmode") == True:
            return """
                QMessageBox { background-color: #121212; color: white; }
                QLabel { color: white; }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
                QPushButton:hover { background-color: #444444; }
            """
        return ""

    def show_error_details(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(E.Error_Dictionary.get(error_code[:1], "Error"))
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(f"Details: {error_obj.message}\nEquation: {error_obj.equation}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.received_result = True
        self.update_return_button()

        if isinstance(result, E.EvalError):
            self.calculator_result = ""
            self.display.setText(ERROR_TEXT)
            self.update_font_size_display()
            if self.setting_value_list.get("error_details") == True:
                self.show_error_details(result)
            return

        self.calculator_result = str(result)
        if self.setting_value_list.get("show_equation") == True:
            final_display_text = f"{equation} = {self.calculator_result}"
        else:
            final_display_text = f"= {self.calculator_result}"

        self.display.setText(final_display_text)
        self.update_font_size_display()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorPrototype()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

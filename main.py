# Main.py
""""" Entry point for the Python Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Evaluate expressions given on the command line, or
   - Load configuration and start the Qt GUI

"""""
import sys
from pathlib import Path
from calculator import config_manager as config_manager, MathEngine as MathEngine


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler, so the check is skipped.
    """

    modules_dir = PROJECT_ROOT / "calculator"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "Keypad.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def run_cli(problems):

    """
    Evaluate every argument and print one line per expression.
    Returns 1 if any of them failed, else 0.
    """

    exit_code = 0
    for problem in problems:
        ergebnis, error = MathEngine.evaluate_expression(problem)
        if error is not None:
            print(f"{problem}: ERROR! ({error.code}: {error.message})")
            exit_code = 1
        else:
            print(f"{problem} = {ergebnis}")
    return exit_code


def main(argv=None):

    """
    Expressions as arguments -> print the results.
    No arguments -> load configuration and start the GUI.
    """

    if argv is None:
        argv = sys.argv[1:]

    if argv:
        return run_cli(argv)

    all_settings = config_manager.load_setting_value("all")
    print("Config loaded:", all_settings)

    # Imported here so the command line mode works without a display
    from calculator import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()
    return 0


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    sys.exit(main())

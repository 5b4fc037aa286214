# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"



def _load_json(path):
    try:
        with open(path, 'r', encoding= 'utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def load_setting_value(key_value):
    """Return every setting for "all", else the single value (0 if it is missing)."""
    settings_dict = _load_json(config_json)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    """Same as load_setting_value, but reads the descriptions shown in the settings dialog."""
    settings_dict = _load_json(ui_strings)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)




def save_setting(settings_dict):
    """Write all settings back to config.json. Returns {} if that failed."""
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (OSError, TypeError):
        return{}





if __name__ == "__main__":
    print(load_setting_value("all"))
    print(load_setting_description("all"))

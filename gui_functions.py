import json
import logging
import os
import sys
from PyQt6.QtWidgets import QMessageBox

import app_detector
from app_lookup import LookupMode

# Constants
SETTINGS_DIR = os.path.join(os.getenv("LOCALAPPDATA") or os.path.expanduser("~"), "Application Inventory")
SETTINGS_FILE = os.path.join(SETTINGS_DIR, "settings.json")

DEFAULT_SETTINGS = {"last_mode": LookupMode.NAME.value}


def show_error(message: str):
    """Display a critical error dialog and exit."""
    msg_box = QMessageBox()
    msg_box.setIcon(QMessageBox.Icon.Critical)
    msg_box.setWindowTitle("Error")
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.StandardButton.Ok)
    msg_box.exec()
    sys.exit(1)


def show_warning(message: str):
    """Display a warning dialog."""
    msg_box = QMessageBox()
    msg_box.setIcon(QMessageBox.Icon.Warning)
    msg_box.setWindowTitle("Warning")
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.StandardButton.Ok)
    msg_box.exec()


def check_registry():
    """Stops the app when the Windows registry cannot be read on this system."""
    if app_detector.winreg is None:
        show_error("The Windows registry is not available on this system.")


def load_settings(path: str = SETTINGS_FILE) -> dict:
    """Loads the viewer settings from AppData, defaults when missing or unreadable."""
    settings = dict(DEFAULT_SETTINGS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return settings

    if isinstance(stored, dict):
        settings.update({k: v for k, v in stored.items() if k in DEFAULT_SETTINGS})

    if settings["last_mode"] not in [mode.value for mode in LookupMode]:
        logging.warning(f"Ignoring unknown lookup mode in settings: {settings['last_mode']}")
        settings["last_mode"] = DEFAULT_SETTINGS["last_mode"]
    return settings


def save_settings(settings: dict, path: str = SETTINGS_FILE):
    """Saves the viewer settings to the settings.json file in AppData."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=4)

import logging
from dataclasses import dataclass
from typing import Optional

try:
    import winreg
except ImportError:  # Not on Windows, only injected sources can be used
    winreg = None

HIVE_NAME = "HKEY_LOCAL_MACHINE"

UNINSTALL_PATHS = (
    r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall",
)

VALUE_NAMES = ("DisplayName", "UninstallString", "InstallLocation", "DisplayVersion", "Publisher")


@dataclass(frozen=True)
class ApplicationRecord:
    display_name: Optional[str]
    uninstall_string: Optional[str]
    install_location: Optional[str]
    display_version: Optional[str]
    publisher: Optional[str]
    product_code: str
    registry_path: str


class RegistrySource:
    """Read-only view of the uninstall roots."""

    def enumerate_subkeys(self, root_path):
        raise NotImplementedError

    def read_values(self, root_path, subkey_name, value_names):
        """Returns a dict of the values present on the subkey; absent ones are left out."""
        raise NotImplementedError


class WinregSource(RegistrySource):
    """Reads HKEY_LOCAL_MACHINE through winreg."""

    def __init__(self):
        if winreg is None:
            raise OSError("The Windows registry is not available on this platform")

    def enumerate_subkeys(self, root_path):
        """Subkey names of root_path; an index that can no longer be enumerated is skipped."""
        names = []
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, root_path) as key:
            for i in range(winreg.QueryInfoKey(key)[0]):
                try:
                    names.append(winreg.EnumKey(key, i))
                except OSError as e:
                    logging.debug(f"Skipping subkey {i} of {root_path}: {e}")
                    continue
        return names

    def read_values(self, root_path, subkey_name, value_names):
        values = {}
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, f"{root_path}\\{subkey_name}") as subkey:
            for value_name in value_names:
                value = get_reg_value(subkey, value_name)
                if value is not None:
                    values[value_name] = value
        return values


def get_reg_value(key, value_name):
    """Helper function to get a registry value, None when the value is missing"""
    try:
        value, _ = winreg.QueryValueEx(key, value_name)
        return value
    except FileNotFoundError:
        return None


def read_app_details(values, root_path, subkey_name):
    """Builds a record from the raw values of one uninstall subkey."""

    def text(value_name):
        value = values.get(value_name)
        return None if value is None else str(value)

    return ApplicationRecord(
        display_name=text("DisplayName"),
        uninstall_string=text("UninstallString"),
        install_location=text("InstallLocation"),
        display_version=text("DisplayVersion"),
        publisher=text("Publisher"),
        product_code=subkey_name,
        registry_path=f"{HIVE_NAME}\\{root_path}\\{subkey_name}",
    )


def list_installed_applications(source: Optional[RegistrySource] = None) -> list[ApplicationRecord]:
    """
    Reads every subkey of both uninstall roots, first root fully before the second.
    Unreadable subkeys are skipped, nothing is sorted or deduplicated.
    """
    if source is None:
        source = WinregSource()

    apps = []
    for path in UNINSTALL_PATHS:
        try:
            subkey_names = list(source.enumerate_subkeys(path))
        except FileNotFoundError:
            logging.debug(f"Uninstall root not present: {path}")
            continue

        found = 0
        for subkey_name in subkey_names:
            try:
                values = source.read_values(path, subkey_name, VALUE_NAMES)
            except OSError as e:
                logging.debug(f"Skipping unreadable subkey {path}\\{subkey_name}: {e}")
                continue

            app = read_app_details(values, path, subkey_name)
            if app.display_name or app.product_code:
                apps.append(app)
                found += 1

        logging.info(f"Read {found} applications from {path}")

    return apps

import logging
from enum import Enum
from typing import Optional

from app_detector import ApplicationRecord, RegistrySource, list_installed_applications

NOT_SET = "N/A"
SEPARATOR = "-" * 60

DETAIL_LABELS = (
    ("Application Name", "display_name"),
    ("Uninstall String", "uninstall_string"),
    ("Install Location", "install_location"),
    ("Display Version", "display_version"),
    ("Publisher", "publisher"),
    ("Product Code", "product_code"),
    ("Registry Path", "registry_path"),
)


class InvalidArgument(ValueError):
    pass


class LookupMode(Enum):
    NAME = "Name"
    PRODUCT_CODE = "ProductCode"


def check_lookup_args(identifier, mode) -> LookupMode:
    """Validates the lookup arguments before anything touches the registry."""
    if not identifier:
        raise InvalidArgument("An application name or product code is required.")
    try:
        return LookupMode(mode)
    except ValueError:
        raise InvalidArgument(f"Unknown lookup mode: {mode!r}") from None


def format_application_details(record: ApplicationRecord) -> list[str]:
    """Returns the seven labelled lines describing one application."""
    width = max(len(label) for label, _ in DETAIL_LABELS)
    lines = []
    for label, field in DETAIL_LABELS:
        value = getattr(record, field)
        lines.append(f"{label.ljust(width)} : {NOT_SET if value is None else value}")
    return lines


def no_match_notice(identifier) -> str:
    return f"No applications found matching '{identifier}'."


class AppInventory:
    """Lookups over the uninstall registry. Every call re-reads the registry."""

    def __init__(self, source: Optional[RegistrySource] = None):
        self.source = source

    def list_installed_applications(self) -> list[ApplicationRecord]:
        return list_installed_applications(self.source)

    def find_applications(self, identifier: str, mode) -> list[ApplicationRecord]:
        """
        Filters the inventory by product code (exact, case-insensitive) or by name
        (case-insensitive substring). Order follows the inventory.
        """
        mode = check_lookup_args(identifier, mode)
        apps = self.list_installed_applications()
        wanted = identifier.casefold()

        if mode is LookupMode.PRODUCT_CODE:
            matches = [app for app in apps if app.product_code.casefold() == wanted]
        else:
            matches = [app for app in apps if app.display_name and wanted in app.display_name.casefold()]

        logging.debug(f"{len(matches)} of {len(apps)} applications match {mode.value} '{identifier}'")
        return matches

    def print_application_details(self, identifier: str, mode):
        matches = self.find_applications(identifier, mode)
        if not matches:
            print(no_match_notice(identifier))
            return

        for app in matches:
            for line in format_application_details(app):
                print(line)
            print(SEPARATOR)

    def get_uninstall_string(self, identifier: str, mode) -> list[Optional[str]]:
        """One uninstall string per match, None where the match has none."""
        return [app.uninstall_string for app in self.find_applications(identifier, mode)]

    def get_display_version(self, identifier: str, mode) -> list[Optional[str]]:
        """One display version per match, None where the match has none."""
        return [app.display_version for app in self.find_applications(identifier, mode)]


def find_applications(identifier, mode):
    return AppInventory().find_applications(identifier, mode)


def print_application_details(identifier, mode):
    AppInventory().print_application_details(identifier, mode)


def get_uninstall_string(identifier, mode):
    return AppInventory().get_uninstall_string(identifier, mode)


def get_display_version(identifier, mode):
    return AppInventory().get_display_version(identifier, mode)

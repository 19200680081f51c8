import logging
import os
import sys

from app_lookup import InvalidArgument, LookupMode, print_application_details

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

MODE_CHOICES = {
    "1": LookupMode.NAME,
    "2": LookupMode.PRODUCT_CODE,
}


def configure_logging(default_level="WARNING"):
    """Sets up logging from APP_INVENTORY_LOG_LEVEL, falling back to default_level."""
    level_name = os.getenv("APP_INVENTORY_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = getattr(logging, default_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def ask_mode():
    """Keeps asking until a valid lookup mode is chosen."""
    while True:
        choice = input("Look up by (1) application name or (2) product code: ").strip()
        if choice in MODE_CHOICES:
            return MODE_CHOICES[choice]
        print("Please enter 1 or 2.")


def main():
    configure_logging()

    mode = ask_mode()
    label = "application name" if mode is LookupMode.NAME else "product code"
    identifier = input(f"Enter the {label}: ")

    try:
        print_application_details(identifier, mode)
    except InvalidArgument as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

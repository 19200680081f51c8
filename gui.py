import logging
import sys
from PyQt6.QtWidgets import (QApplication, QListWidget, QPushButton, QVBoxLayout, QWidget, QTextEdit, QHBoxLayout,
                             QGroupBox, QLabel, QListWidgetItem, QComboBox, QLineEdit)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon, QFont
import gui_functions
from app_lookup import (AppInventory, InvalidArgument, LookupMode, SEPARATOR, format_application_details,
                        no_match_notice)
from lookup_prompt import configure_logging


class MainWindow(QWidget):
    def __init__(self, inventory=None):
        super().__init__()
        self.setWindowTitle("Application Inventory")
        self.setGeometry(100, 100, 700, 600)
        self.setWindowIcon(QIcon("icon.ico"))

        self.inventory = inventory or AppInventory()
        self.settings = gui_functions.load_settings()
        self.apps_list = []

        self._init_ui()
        self.refresh_apps()

    def _init_ui(self):
        """Initializes all the GUI elements."""
        main_layout = QVBoxLayout()

        # Search row
        search_row = QHBoxLayout()

        self.mode_combo = QComboBox()
        self.mode_combo.addItems([mode.value for mode in LookupMode])
        self.mode_combo.setCurrentText(self.settings["last_mode"])
        search_row.addWidget(self.mode_combo)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Application name or product code")
        self.search_edit.returnPressed.connect(self.search)
        search_row.addWidget(self.search_edit)

        self.search_btn = QPushButton("Search")
        self.search_btn.clicked.connect(self.search)
        search_row.addWidget(self.search_btn)

        self.refresh_btn = QPushButton("Refresh")
        self.refresh_btn.setToolTip("Read the registry again")
        self.refresh_btn.clicked.connect(self.refresh_apps)
        search_row.addWidget(self.refresh_btn)

        main_layout.addLayout(search_row)

        # Installed apps list
        box = QGroupBox("Installed Apps")
        box_layout = QVBoxLayout()
        self.list_widget = QListWidget()
        self.list_widget.setFont(QFont("Arial", 10))
        self.list_widget.itemSelectionChanged.connect(self.show_selected_app)
        box_layout.addWidget(self.list_widget)
        box.setLayout(box_layout)
        main_layout.addWidget(box)

        # Count label
        self.count_label = QLabel()
        main_layout.addWidget(self.count_label)

        # Details box
        self.details_box = QTextEdit()
        self.details_box.setReadOnly(True)
        self.details_box.setFont(QFont("Consolas", 10))
        self.details_box.setMaximumHeight(int(self.height() * 0.4))
        main_layout.addWidget(self.details_box)

        self.setLayout(main_layout)

    def refresh_apps(self):
        """Re-reads the registry and rebuilds the installed apps list."""
        try:
            self.apps_list = self.inventory.list_installed_applications()
        except OSError as e:
            logging.error(f"Could not read the installed applications: {e}", exc_info=True)
            gui_functions.show_warning(f"Could not read the installed applications:\n\n{e}")
            self.apps_list = []

        self.list_widget.blockSignals(True)
        self.list_widget.clear()
        for app in self.apps_list:
            name = app.display_name or app.product_code
            item = QListWidgetItem(f"{name} - {app.display_version or 'Unknown'}")
            item.setData(Qt.ItemDataRole.UserRole, app)
            self.list_widget.addItem(item)
        self.list_widget.sortItems(Qt.SortOrder.AscendingOrder)
        self.list_widget.blockSignals(False)

        self.count_label.setText(f"{len(self.apps_list)} applications found")

    def show_selected_app(self):
        """Shows the details of the app selected in the list."""
        selected = self.list_widget.selectedItems()
        if selected:
            app = selected[0].data(Qt.ItemDataRole.UserRole)
            self.details_box.setPlainText("\n".join(format_application_details(app)))

    def search(self):
        """Runs the lookup for the entered identifier and shows every match."""
        identifier = self.search_edit.text()
        mode = LookupMode(self.mode_combo.currentText())

        try:
            matches = self.inventory.find_applications(identifier, mode)
        except InvalidArgument as e:
            gui_functions.show_warning(str(e))
            return
        except OSError as e:
            logging.error(f"Could not search the installed applications: {e}", exc_info=True)
            gui_functions.show_warning(f"Could not search the installed applications:\n\n{e}")
            return

        if not matches:
            self.details_box.setPlainText(no_match_notice(identifier))
            return

        blocks = ["\n".join(format_application_details(app) + [SEPARATOR]) for app in matches]
        self.details_box.setPlainText("\n".join(blocks))

    def closeEvent(self, event):
        """Remembers the lookup mode for the next start."""
        self.settings["last_mode"] = self.mode_combo.currentText()
        try:
            gui_functions.save_settings(self.settings)
        except OSError as e:
            logging.warning(f"Could not save settings: {e}")
        event.accept()


def main():
    configure_logging("INFO")
    application = QApplication(sys.argv)
    gui_functions.check_registry()

    window = MainWindow()
    window.show()

    return application.exec()


if __name__ == "__main__":
    sys.exit(main())

import pytest

import app_detector
from app_detector import RegistrySource, UNINSTALL_PATHS

NATIVE_ROOT, WOW_ROOT = UNINSTALL_PATHS


class FakeRegistrySource(RegistrySource):
    """In-memory uninstall roots: {root: {subkey: values dict or an exception to raise}}."""

    def __init__(self, roots):
        self.roots = roots
        self.reads = 0

    def enumerate_subkeys(self, root_path):
        self.reads += 1
        if root_path not in self.roots:
            raise FileNotFoundError(root_path)
        return list(self.roots[root_path])

    def read_values(self, root_path, subkey_name, value_names):
        values = self.roots[root_path][subkey_name]
        if isinstance(values, Exception):
            raise values
        return {name: value for name, value in values.items() if name in value_names}


class FakeKey:
    def __init__(self, path):
        self.path = path

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeWinreg:
    """
    Stands in for the winreg module. keys maps a full HKLM path to its values;
    subkeys of a path are derived from the other paths. open_errors and
    enum_errors make OpenKey on a path, or EnumKey on (path, index), raise.
    """

    HKEY_LOCAL_MACHINE = 0x80000002

    def __init__(self, keys):
        self.keys = keys
        self.open_errors = {}
        self.enum_errors = {}
        self.opened = []

    def OpenKey(self, root, path):
        assert root == self.HKEY_LOCAL_MACHINE
        self.opened.append(path)
        if path in self.open_errors:
            raise self.open_errors[path]
        if path not in self.keys:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return FakeKey(path)

    def _subkeys(self, path):
        prefix = path + "\\"
        return [p[len(prefix):] for p in self.keys if p.startswith(prefix) and "\\" not in p[len(prefix):]]

    def QueryInfoKey(self, key):
        return len(self._subkeys(key.path)), len(self.keys[key.path]), 0

    def EnumKey(self, key, index):
        if (key.path, index) in self.enum_errors:
            raise self.enum_errors[(key.path, index)]
        return self._subkeys(key.path)[index]

    def QueryValueEx(self, key, value_name):
        values = self.keys[key.path]
        if value_name not in values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return values[value_name], 1


@pytest.fixture
def make_registry():
    return FakeRegistrySource


@pytest.fixture
def fake_winreg(monkeypatch):
    def install(keys):
        fake = FakeWinreg(keys)
        monkeypatch.setattr(app_detector, "winreg", fake)
        return fake
    return install


@pytest.fixture
def registry(make_registry):
    return make_registry({
        NATIVE_ROOT: {
            "{4A03706F-666A-4037-7777-5F2748764D10}": {
                "DisplayName": "Adobe Acrobat Reader DC",
                "UninstallString": "MsiExec.exe /I{4A03706F-666A-4037-7777-5F2748764D10}",
                "InstallLocation": r"C:\Program Files\Adobe\Acrobat Reader DC",
                "DisplayVersion": "23.006.20320",
                "Publisher": "Adobe Systems Incorporated",
            },
            "Microsoft Edge": {
                "DisplayName": "Microsoft Edge",
                "UninstallString": r'"C:\Program Files (x86)\Microsoft\Edge\setup.exe" --uninstall',
                "DisplayVersion": "118.0.2088.46",
                "Publisher": "Microsoft Corporation",
            },
            "AddressBook": {},
        },
        WOW_ROOT: {
            "{TEST-0001}": {
                "DisplayName": "Notepad++ (32-bit x86)",
                "DisplayVersion": "8.5.8",
            },
            "Adobe Flash Player": {
                "DisplayName": "Adobe Flash Player 32 NPAPI",
                "UninstallString": r"C:\Windows\SysWOW64\Macromed\Flash\FlashUtil32.exe -maintain plugin",
            },
        },
    })

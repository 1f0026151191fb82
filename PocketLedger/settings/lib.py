"""Settings library for application preferences.

Provides:
    - Schema validation and enforcement for settings.json.
    - Loading, saving, reverting, and managing application settings.
    - Constants for the persisted expense file and category suggestions.
"""

import json
import logging
import pathlib
import re
import shutil
from typing import Dict, Any, Optional, List

from PySide6 import QtCore, QtWidgets

from . import locale
from ..status import status

app_name: str = 'PocketLedger'

DEFAULT_CSV_PATH: str = 'expenses.csv'
DEFAULT_CATEGORIES: List[str] = ['Food', 'Travel', 'Shopping', 'Bills', 'Others']

SETTINGS_SCHEMA: Dict[str, Any] = {
    'csv_path': {
        'type': str,
        'required': True,
    },
    'categories': {
        'type': list,
        'required': True,
        'item_type': str,
    },
    'locale': {
        'type': str,
        'required': True,
        'allowed_values': locale.LOCALES,
    },
    'currency': {
        'type': str,
        'required': True,
        'format': 'currency',
    },
}


def is_valid_currency_code(value: str) -> bool:
    """Check if a string is empty or a three letter ISO 4217 code.

    Args:
        value (str): Currency code to validate.

    Returns:
        bool: True if value is '' or matches 'ABC', False otherwise.
    """
    return value == '' or bool(re.fullmatch(r'[A-Z]{3}', value))


def _validate_categories(categories: List[Any]) -> None:
    """Validate the 'categories' list.

    Args:
        categories: List of category suggestions.

    Raises:
        TypeError: If an item is not a string.
        ValueError: If an item is blank or duplicated.
    """
    seen = set()
    for item in categories:
        if not isinstance(item, str):
            raise TypeError(f'Category "{item}" must be a string, got {type(item).__name__}.')
        if not item.strip():
            raise ValueError('Categories must not be empty.')
        if item in seen:
            raise ValueError(f'Duplicate category "{item}".')
        seen.add(item)


def validate_settings(data: Dict[str, Any]) -> None:
    """Validate settings data against :data:`SETTINGS_SCHEMA`.

    Args:
        data: Settings dictionary.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If a required field is missing or holds an invalid value.
    """
    if not isinstance(data, dict):
        raise TypeError(f'Settings must be a dict, got {type(data).__name__}.')

    for field, specs in SETTINGS_SCHEMA.items():
        if field not in data:
            if specs.get('required'):
                raise ValueError(f'Missing required field: "{field}"')
            continue

        value = data[field]
        if not isinstance(value, specs['type']):
            raise TypeError(
                f'Field "{field}" must be of type {specs["type"].__name__}, got {type(value).__name__}.'
            )

        if field == 'csv_path' and not value.strip():
            raise ValueError('Field "csv_path" must not be empty.')

        if 'item_type' in specs:
            _validate_categories(value)

        if 'allowed_values' in specs and value not in specs['allowed_values']:
            raise ValueError(f'Field "{field}" has invalid value "{value}".')

        if specs.get('format') == 'currency' and not is_valid_currency_code(value):
            raise ValueError(f'Field "{field}" must be a three letter currency code, got "{value}".')


class ConfigPaths:
    """Manage application file paths and ensure the default settings file exists.

    The settings template ships with the package and is copied into the
    user's application data directory on first use.
    """

    def __init__(self) -> None:
        QtWidgets.QApplication.setApplicationName(app_name)
        QtWidgets.QApplication.setOrganizationName('')

        p = QtCore.QStandardPaths.writableLocation(QtCore.QStandardPaths.AppDataLocation)
        app_data_dir = pathlib.Path(p)
        logging.debug(f'Using app data directory: {app_data_dir}')

        self.template_dir: pathlib.Path = pathlib.Path(__file__).parent.parent / 'config'
        self.settings_template: pathlib.Path = self.template_dir / 'settings.json.template'

        self.config_dir: pathlib.Path = app_data_dir / 'config'
        self.settings_path: pathlib.Path = self.config_dir / 'settings.json'

        self._verify_and_prepare()

    def _verify_and_prepare(self) -> None:
        """Verify the template exists and prepare the config directory and file.

        Raises:
            FileNotFoundError: If the packaged settings template is missing.
        """
        if not self.settings_template.exists():
            msg = f'Missing settings template: {self.settings_template}'
            logging.error(msg)
            raise FileNotFoundError(msg)

        if not self.config_dir.exists():
            logging.debug(f'Creating config directory: {self.config_dir}')
            self.config_dir.mkdir(parents=True, exist_ok=True)

        if not self.settings_path.exists():
            logging.debug(f'Copying default settings from template to {self.settings_path}')
            shutil.copy(self.settings_template, self.settings_path)

    def revert_settings_to_template(self) -> None:
        """Restore settings.json from the default template file."""
        logging.debug(f'Reverting settings to template: {self.settings_template}')
        shutil.copy(self.settings_template, self.settings_path)


class SettingsAPI(ConfigPaths):
    """
    Provides an interface to get/set/revert/save the values stored in settings.json.
    """

    def __init__(self, settings_path: Optional[str] = None) -> None:
        """Initialize SettingsAPI and load the settings data.

        Args:
            settings_path: Optional path to a custom settings.json file.
        """
        super().__init__()

        if settings_path:
            self.settings_path = pathlib.Path(settings_path)
            if not self.settings_path.exists():
                self.settings_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy(self.settings_template, self.settings_path)

        self._signals_blocked: bool = False
        self.data: Dict[str, Any] = {}

        self.load()

    def __getitem__(self, key: str) -> Any:
        """Retrieve a settings value using dictionary-style access.

        Raises:
            KeyError: If key is not defined in the schema.
        """
        if key not in SETTINGS_SCHEMA:
            raise KeyError(f'Invalid settings key: {key}, must be one of {list(SETTINGS_SCHEMA)}')

        v = self.data.get(key)
        _type = SETTINGS_SCHEMA[key]['type']
        if not isinstance(v, _type):
            logging.error(f'Settings key "{key}" is not of type {_type}, got {type(v)}.')
            return None

        if isinstance(v, list):
            return list(v)
        return v

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Return a settings value, or ``default`` if the key is unknown or unset."""
        if key not in SETTINGS_SCHEMA:
            return default
        v = self[key]
        return default if v is None else v

    def set(self, key: str, value: Any) -> None:
        """Validate, assign and persist a settings value.

        Args:
            key: Settings key to set.
            value: Value to assign.

        Raises:
            KeyError: If key is not in the schema.
            ValueError, TypeError: If the new value does not validate. The old value is kept.
        """
        if key not in SETTINGS_SCHEMA:
            raise KeyError(f'Invalid settings key: {key}, must be one of {list(SETTINGS_SCHEMA)}')

        previous = self.data.get(key)
        self.data[key] = value
        try:
            validate_settings(self.data)
        except (ValueError, TypeError) as e:
            logging.error(f'Validation error on set("{key}"): {e}')
            self.data[key] = previous
            raise

        self.save()

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.configChanged.emit(key)

    def block_signals(self, v: bool) -> None:
        """Enable or disable emission of configuration change signals."""
        self._signals_blocked = v

    def load(self) -> Dict[str, Any]:
        """Load settings.json from disk and validate against schema.

        Returns:
            The loaded settings dictionary.

        Raises:
            status.SettingsNotFoundException: If settings.json is missing.
            status.SettingsInvalidException: If JSON parsing or validation fails.
        """
        logging.debug(f'Loading settings from "{self.settings_path}"')
        if not self.settings_path.exists():
            raise status.SettingsNotFoundException(f'{self.settings_path}')

        try:
            with self.settings_path.open('r', encoding='utf-8') as f:
                data: Dict[str, Any] = json.load(f)
            validate_settings(data)
        except (ValueError, TypeError) as e:
            raise status.SettingsInvalidException(f'{self.settings_path}: {e}') from e

        self.data = data
        return self.data

    def save(self) -> None:
        """Persist the settings to settings.json."""
        logging.debug(f'Saving settings to "{self.settings_path}"')
        with self.settings_path.open('w', encoding='utf-8') as f:
            json.dump(self.data, f, indent=4, ensure_ascii=False)

    def revert(self) -> None:
        """Revert all settings to the template defaults and notify listeners."""
        self.revert_settings_to_template()
        self.load()

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        for key in SETTINGS_SCHEMA:
            signals.configChanged.emit(key)

    @property
    def csv_path(self) -> pathlib.Path:
        """The persisted expenses file. Relative paths resolve against the working directory."""
        return pathlib.Path(self.data.get('csv_path') or DEFAULT_CSV_PATH)

    @property
    def categories(self) -> List[str]:
        return self.get('categories', list(DEFAULT_CATEGORIES))

    @property
    def locale_name(self) -> str:
        return self.get('locale', locale.DEFAULT_LOCALE)

    @property
    def currency(self) -> str:
        return self.get('currency', '') or locale.get_currency_from_locale(self.locale_name)


settings: SettingsAPI = SettingsAPI()

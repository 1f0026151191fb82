"""Currency display for the views, using Babel.

The persisted CSV file always uses the fixed ``0.00`` amount form, see
:func:`PocketLedger.core.codec.format_amount`. Nothing here affects it.
"""
import logging
from typing import List, Optional

from babel import Locale, numbers
from babel.core import UnknownLocaleError

DEFAULT_LOCALE = 'en_IN'
DEFAULT_CURRENCY = 'INR'

LOCALES: List[str] = [
    'en_IN',
    'en_GB',
    'en_US',
    'en_AU',
    'en_CA',
    'en_ZA',
    'de_DE',
    'es_ES',
    'es_MX',
    'fr_FR',
    'fr_BE',
    'it_IT',
    'nl_NL',
    'hu_HU',
    'da_DK',
    'fi_FI',
    'sv_SE',
    'nb_NO',
    'ja_JP',
    'ko_KR',
    'zh_CN',
    'pt_BR',
]


def get_currency_from_locale(locale: str) -> str:
    """
    Return the currency in use in the locale's territory, e.g. 'EUR' for 'fr_FR'.

    Falls back to :data:`DEFAULT_CURRENCY` when the locale names no territory,
    or Babel knows no currency for it.
    """
    _, _, territory = locale.partition('_')
    if not territory:
        return DEFAULT_CURRENCY

    try:
        currencies = numbers.get_territory_currencies(territory.upper())
    except (KeyError, ValueError) as e:
        logging.debug(f'No currency for territory "{territory}": {e}')
        return DEFAULT_CURRENCY
    return currencies[0] if currencies else DEFAULT_CURRENCY


def format_currency_value(value: float, locale: str, currency: Optional[str] = None) -> str:
    """
    Format an amount as currency, e.g. ``₹1,234.50`` for 'en_IN'.

    Args:
        value (float): The amount.
        locale (str): Locale string, e.g. 'fr_FR'.
        currency (str, optional): ISO 4217 code overriding the locale's currency.

    Returns:
        str: The formatted amount, or the plain ``0.00`` form if the locale is unknown.
    """
    try:
        return numbers.format_currency(
            value,
            currency=currency or get_currency_from_locale(locale),
            locale=Locale.parse(locale)
        )
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logging.debug(f'Could not format "{value}" for locale "{locale}": {e}')
        return f'{value:.2f}'

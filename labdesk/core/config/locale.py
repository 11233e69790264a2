from labdesk.model import Locale

from .base import BaseSettings


class LocaleSettings(BaseSettings):
    default: Locale = Locale.English

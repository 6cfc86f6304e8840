"""Обработчики команд бота."""
from healthbot.handlers.start import register_handlers as register_start_handlers
from healthbot.handlers.auth import register_handlers as register_auth_handlers
from healthbot.handlers.registration import register_handlers as register_registration_handlers
from healthbot.handlers.activity import register_handlers as register_activity_handlers
from healthbot.handlers.stats import register_handlers as register_stats_handlers
from healthbot.handlers.tips import register_handlers as register_tips_handlers
from healthbot.handlers.settings import register_handlers as register_settings_handlers

__all__ = [
    "register_start_handlers",
    "register_auth_handlers",
    "register_registration_handlers",
    "register_activity_handlers",
    "register_stats_handlers",
    "register_tips_handlers",
    "register_settings_handlers",
]

"""
Telegram Setup Wizard

Setup steps that validate a Telegram bot token against the Bot API and
persist it to the project's .env file for the bot and its container.
"""

__version__ = "0.1.0"
__author__ = "Telegram Setup Wizard Team"

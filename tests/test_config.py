from dataclasses import replace

import pytest

from tredcental.config import check_bot_settings, settings


def test_bot_needs_token():
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        check_bot_settings(replace(settings, bot_token="", admin_id=1))


def test_bot_needs_admin():
    with pytest.raises(RuntimeError, match="ADMIN_ID"):
        check_bot_settings(replace(settings, bot_token="123:abc", admin_id=0))


def test_bot_settings_ok():
    check_bot_settings(replace(settings, bot_token="123:abc", admin_id=1))

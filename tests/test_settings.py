from parking_lot.config.settings_env import Settings
import os
from unittest.mock import patch
from loguru import logger as loguru_logger


def test_settings():
    settings = Settings()
    assert settings.DAY_PASS_FEE == 150
    assert settings.DAILY_CAP_FEE == 200
    assert [(t.max_hours, t.fee) for t in settings.HOURLY_TIERS] == [(1, 50), (3, 100), (6, 150)]


def test_tiers_from_environment():
    tiers = '[{"max_hours": 2, "fee": 40}, {"max_hours": 8, "fee": 90}]'
    with patch.dict(os.environ, {"HOURLY_TIERS": tiers, "DAY_PASS_FEE": "120"}):
        settings = Settings()

    assert [(t.max_hours, t.fee) for t in settings.HOURLY_TIERS] == [(2, 40), (8, 90)]
    assert settings.DAY_PASS_FEE == 120


def test_initialize_logger_dev_mode():
    with patch.dict(os.environ, {"DEV_MODE": "True"}):
        # Reload settings_env to pick up the patched environment variable
        import parking_lot.config.settings_env as settings_env
        import importlib
        importlib.reload(settings_env)

        # Reload utils to re-initialize the logger with new settings
        import parking_lot.shared.utils
        importlib.reload(parking_lot.shared.utils)

        logger = parking_lot.shared.utils.initialize_logger()
        assert logger.level("TRACE").no == loguru_logger.level("TRACE").no


def test_initialize_logger_prod_mode():
    with patch.dict(os.environ, {"DEV_MODE": "False"}):
        import parking_lot.config.settings_env as settings_env
        import importlib
        importlib.reload(settings_env)

        import parking_lot.shared.utils
        importlib.reload(parking_lot.shared.utils)

        logger = parking_lot.shared.utils.initialize_logger()
        assert logger.level("INFO").no == loguru_logger.level("INFO").no

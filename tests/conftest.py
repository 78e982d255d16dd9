import pytest

import dagette.config as config
import dagette.utils.events as events
import dagette.utils.logging as dlog


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch):
    # settings, subscribers and the dagette logger are process-wide
    monkeypatch.setattr(config, "_SETTINGS", config.Settings())
    monkeypatch.setattr(events, "_REGISTRY", {})
    yield
    dlog.disable_rich_logging()
    dlog.get()  # back to the default settings level

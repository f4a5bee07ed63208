"""Tests for SchedulingProperties binding."""

from datetime import timedelta

from cronjobs.config.properties import SchedulingProperties
from cronjobs.core.config import Config


class TestSchedulingProperties:
    def test_bind_defaults(self):
        props = Config({}).bind(SchedulingProperties)
        assert props.delay_ms == 2000
        assert props.fixed_delay_ms == 2000
        assert props.fixed_rate_ms == 2000
        assert props.async_rate_ms == 1000
        assert props.async_work_ms == 2000
        assert props.cron == "0 55 23 * * ?"
        assert props.pool_size == 4

    def test_packaged_defaults_match_dataclass_defaults(self):
        assert Config.defaults().bind(SchedulingProperties) == SchedulingProperties()

    def test_bind_custom_values(self):
        config = Config({"cronjobs": {"scheduling": {"delay_ms": 500, "cron": "0 0 12 * * ?"}}})
        props = config.bind(SchedulingProperties)
        assert props.delay_ms == 500
        assert props.cron == "0 0 12 * * ?"
        assert props.fixed_rate_ms == 2000

    def test_env_override_is_coerced(self, monkeypatch):
        monkeypatch.setenv("CRONJOBS_SCHEDULING_DELAY_MS", "750")
        props = Config({"cronjobs": {"scheduling": {"delay_ms": 500}}}).bind(SchedulingProperties)
        assert props.delay_ms == 750

    def test_timedelta_views(self):
        props = SchedulingProperties(delay_ms=1500, async_rate_ms=250)
        assert props.delay == timedelta(milliseconds=1500)
        assert props.async_rate == timedelta(milliseconds=250)
        assert props.fixed_delay == timedelta(seconds=2)
        assert props.fixed_rate == timedelta(seconds=2)
        assert props.async_work == timedelta(seconds=2)

"""Tests for the built-in steps"""

from __future__ import annotations

import pytest

from startup.runtime.pipeline import PipelineController
from startup.steps import BUILTIN_STEPS, EventLoopProbeStep, PlatformInfoStep


class TestPlatformInfoStep:
    @pytest.mark.asyncio
    async def test_collects_platform_info(self, caplog):
        step = PlatformInfoStep()

        with caplog.at_level("INFO", logger="startup.steps.platform_info"):
            await step.run_internal()

        assert set(step.info) == {
            "python",
            "implementation",
            "platform",
            "machine",
            "executable",
        }
        assert "Running" in caplog.text


class TestEventLoopProbeStep:
    @pytest.mark.asyncio
    async def test_responsive_loop_passes(self):
        step = EventLoopProbeStep()
        await step.run_internal()
        assert len(step.latencies) == step.samples

    @pytest.mark.asyncio
    async def test_latency_over_limit_fails(self):
        class StrictProbe(EventLoopProbeStep):
            max_latency_s = -1.0

        with pytest.raises(RuntimeError, match="resume latency"):
            await StrictProbe().run_internal()


@pytest.mark.asyncio
async def test_builtin_pipeline_runs():
    controller = PipelineController()
    controller.register([step.step_id for step in BUILTIN_STEPS])

    report = await controller.run()

    assert report.completed
    assert report.succeeded == ["platform_info", "event_loop_probe"]

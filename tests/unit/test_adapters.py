# SPDX-License-Identifier: MIT
"""Unit tests for provider status adapters."""

import pytest
from helpers import luma_generation, runway_task

from reelforge.polling import Failure, LumaStatusAdapter, Pending, RunwayStatusAdapter, Success, Unrecognized
from reelforge.polling.adapters import _VocabularyAdapter
from reelforge.types import ResultKind


@pytest.mark.unit
class TestRunwayStatusAdapter:
    adapter = RunwayStatusAdapter()

    @pytest.mark.parametrize("status", ["PENDING", "THROTTLED", "RUNNING"])
    def test_working_statuses_are_pending(self, status):
        assert self.adapter.classify(runway_task(status), ResultKind.VIDEO) == Pending(status)

    def test_success_uses_first_output(self):
        task = runway_task("SUCCEEDED", ["https://x/video.mp4", "https://x/other.mp4"])

        assert self.adapter.classify(task, ResultKind.VIDEO) == Success("https://x/video.mp4")

    @pytest.mark.parametrize("output", [None, []])
    def test_success_without_output_is_failure(self, output):
        result = self.adapter.classify(runway_task("SUCCEEDED", output), ResultKind.VIDEO)

        assert result == Failure("Task succeeded but no output URL found.")

    def test_failure_reason_is_synthesized(self):
        result = self.adapter.classify(runway_task("FAILED"), ResultKind.VIDEO)

        assert result == Failure("RunwayML task failed (Status: FAILED)")

    def test_unknown_status(self):
        assert self.adapter.classify(runway_task("CANCELLED"), ResultKind.VIDEO) == Unrecognized("CANCELLED")

    def test_reads_plain_mappings(self):
        snapshot = {"status": "SUCCEEDED", "output": ["https://x/a.mp4"]}

        assert self.adapter.classify(snapshot, ResultKind.VIDEO) == Success("https://x/a.mp4")

    def test_not_found_reason(self):
        assert self.adapter.not_found_reason("abc") == "Task ID abc not found."


@pytest.mark.unit
class TestLumaStatusAdapter:
    adapter = LumaStatusAdapter()

    @pytest.mark.parametrize(("state", "label"), [("queued", "QUEUED"), ("dreaming", "DREAMING")])
    def test_working_states_are_pending_and_uppercased(self, state, label):
        assert self.adapter.classify(luma_generation(state), ResultKind.VIDEO) == Pending(label)

    @pytest.mark.parametrize(
        ("kind", "assets", "expected"),
        [
            (ResultKind.VIDEO, {"video": "https://l/v.mp4", "image": None}, "https://l/v.mp4"),
            (ResultKind.IMAGE, {"video": None, "image": "https://l/i.jpg"}, "https://l/i.jpg"),
            (ResultKind.UPSCALED_VIDEO, {"video": "https://l/up.mp4", "image": None}, "https://l/up.mp4"),
        ],
    )
    def test_success_reads_asset_for_kind(self, kind, assets, expected):
        generation = luma_generation("completed", assets)

        assert self.adapter.classify(generation, kind) == Success(expected)

    def test_success_without_asset_is_failure(self):
        generation = luma_generation("completed", {"video": None, "image": None})

        result = self.adapter.classify(generation, ResultKind.VIDEO)

        assert result == Failure("Task completed but no video URL found.")

    def test_success_without_assets_map_is_failure(self):
        result = self.adapter.classify(luma_generation("completed"), ResultKind.IMAGE)

        assert result == Failure("Task completed but no image URL found.")

    def test_failure_reason_from_snapshot(self):
        generation = luma_generation("failed", failure_reason="content moderation")

        assert self.adapter.classify(generation, ResultKind.VIDEO) == Failure("content moderation")

    def test_failure_reason_default(self):
        assert self.adapter.classify(luma_generation("failed"), ResultKind.VIDEO) == Failure("Unknown failure reason")

    def test_unknown_state(self):
        assert self.adapter.classify(luma_generation("paused"), ResultKind.VIDEO) == Unrecognized("paused")

    def test_upscale_asset_field_is_configurable(self):
        adapter = LumaStatusAdapter({ResultKind.UPSCALED_VIDEO: "upscaled_video"})
        generation = luma_generation("completed", {"video": "https://l/v.mp4", "upscaled_video": "https://l/4k.mp4"})

        assert adapter.classify(generation, ResultKind.UPSCALED_VIDEO) == Success("https://l/4k.mp4")
        assert adapter.classify(generation, ResultKind.VIDEO) == Success("https://l/v.mp4")

    def test_not_found_reason(self):
        assert self.adapter.not_found_reason("g1") == "Generation ID g1 not found."


@pytest.mark.unit
class TestVocabularyAdapterContract:
    def test_adapter_without_not_found_reason_cannot_be_built(self):
        class PartialAdapter(_VocabularyAdapter):
            pending_statuses = frozenset({"busy"})
            success_status = "done"
            failure_status = "error"

            def status_of(self, snapshot):
                return snapshot["status"]

            def extract_success_asset(self, snapshot, kind):
                return snapshot.get("url")

            def extract_failure_reason(self, snapshot):
                return "error"

            def missing_asset_reason(self, kind):
                return "no url"

        with pytest.raises(TypeError):
            PartialAdapter()

    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            _VocabularyAdapter()
